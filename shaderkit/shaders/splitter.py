# shaderkit/shaders/splitter.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from shaderkit.types import BackendMode

VS_ENTRY = "void VS("
PS_ENTRY = "void PS("
MAIN_ENTRY = "void main("

COMMENT_OPEN = "/* "
COMMENT_CLOSE = "*/\n"


@dataclass(frozen=True, slots=True)
class SplitConfig:
    """
    Entry point conventions for one backend family.

    `rename_to` is the single entry name each stage ends up with, or None
    when both entry points keep their own names. `vertex_only_prefix`
    is commented out of the pixel stage (vertex inputs).
    """

    vs_entry: str = VS_ENTRY
    ps_entry: str = PS_ENTRY
    rename_to: Optional[str] = None
    vertex_only_prefix: Optional[str] = None


SPLIT_CONFIGS = {
    BackendMode.OPENGL: SplitConfig(
        rename_to=MAIN_ENTRY, vertex_only_prefix="attribute "
    ),
    BackendMode.DIRECT3D: SplitConfig(),
}


@dataclass(frozen=True, slots=True)
class StageSources:
    vs: str
    ps: str


def split_stages(code: str, config: SplitConfig) -> StageSources:
    """
    Derive vertex and pixel stage sources from one combined source.

    The vertex stage comments out everything from the pixel entry to the
    end of the text. The pixel stage comments out the vertex entry up to
    its own entry. Entry points are renamed when the config asks for it.
    """
    vs_entry_out = config.rename_to or config.vs_entry
    ps_entry_out = config.rename_to or config.ps_entry

    vs = code.replace(config.vs_entry, vs_entry_out)
    vs = vs.replace(config.ps_entry, COMMENT_OPEN + config.ps_entry)
    vs += COMMENT_CLOSE

    ps = code
    if config.vertex_only_prefix:
        ps = ps.replace(config.vertex_only_prefix, "// " + config.vertex_only_prefix)
    ps = ps.replace(config.vs_entry, COMMENT_OPEN + config.vs_entry)
    ps = ps.replace(config.ps_entry, COMMENT_CLOSE + ps_entry_out)

    return StageSources(vs=vs, ps=ps)


def split_for_backend(code: str, backend: BackendMode) -> StageSources:
    return split_stages(code, SPLIT_CONFIGS[backend])
