# shaderkit/shaders/variation.py
from __future__ import annotations

import itertools
import posixpath
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, List

from shaderkit.config import VARIATION_SIZE
from shaderkit.errors import ShaderCompileError
from shaderkit.log import logger
from shaderkit.shaders.compiler import StageCompiler
from shaderkit.shaders.defines import canonicalize_defines, defines_hash
from shaderkit.types import DefinesHash, ShaderStage

if TYPE_CHECKING:
    from shaderkit.shaders.shader import Shader

# Shared by all variations so a (generation) pair never repeats.
_generations = itertools.count(1)


def variation_name(shader_name: str, defines: str, join_char: str = "_") -> str:
    """Shader name without extension, joined with the defines."""
    base, _ = posixpath.splitext(shader_name.replace("\\", "/"))
    full_name = base + join_char + defines.replace(" ", join_char)
    if full_name.endswith(join_char):
        full_name = full_name[: -len(join_char)]
    return full_name


class ShaderVariation:
    """
    One stage of a shader compiled with one define combination.

    The compiled payload is dropped by release() while name and defines
    stay, so the same object is recompiled after the shader reloads.
    """

    def __init__(
        self, owner: Shader, stage: ShaderStage, name: str, defines: str
    ) -> None:
        self.owner = owner
        self.stage = stage
        self.name = name
        self.defines = defines
        self.valid = False
        self.payload: Any = None
        self.generation = next(_generations)
        self.compiler_output = ""
        # Called with (variation, old generation) on release
        self.release_listeners: List[Callable[[ShaderVariation, int], None]] = []

    def __repr__(self) -> str:
        return f"ShaderVariation({self.name!r}, stage={self.stage.name}, valid={self.valid})"

    @property
    def source(self) -> str:
        return self.owner.source_code(self.stage)

    def compile(self, compiler: StageCompiler) -> Any:
        """Return the compiled payload, compiling first if invalid."""
        if self.valid:
            return self.payload

        try:
            payload = compiler.compile(self.stage, self.source, self.defines)
        except ShaderCompileError as e:
            self.compiler_output = e.output
            logger.error(f"Failed to compile variation '{self.name}': {e.output}")
            raise ShaderCompileError(self.name, e.output) from e

        self.payload = payload
        self.valid = True
        self.compiler_output = ""
        logger.debug(f"Compiled variation '{self.name}'")
        return payload

    def release(self) -> None:
        """Drop the compiled payload. Identity and name are kept."""
        release = getattr(self.payload, "release", None)
        if callable(release):
            release()

        self.payload = None
        self.valid = False
        old_generation = self.generation
        self.generation = next(_generations)

        listeners, self.release_listeners = self.release_listeners, []
        for listener in listeners:
            listener(self, old_generation)


class VariationCache:
    """Variations of one stage of one shader, keyed by canonical defines."""

    def __init__(self, owner: Shader, stage: ShaderStage) -> None:
        self._owner = owner
        self.stage = stage
        self._entries: Dict[DefinesHash, ShaderVariation] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ShaderVariation]:
        return iter(list(self._entries.values()))

    def __contains__(self, defines: str) -> bool:
        return defines_hash(canonicalize_defines(defines)) in self._entries

    def get_or_create(self, defines: str) -> ShaderVariation:
        canonical = canonicalize_defines(defines)
        key = defines_hash(canonical)

        variation = self._entries.get(key)
        if variation is not None:
            return variation

        variation = ShaderVariation(
            self._owner,
            self.stage,
            name=variation_name(
                self._owner.name, canonical, self._owner.settings.join_char
            ),
            defines=canonical,
        )
        self._entries[key] = variation

        self._owner.add_memory_use(VARIATION_SIZE)
        logger.debug(f"Created {self.stage.value} variation '{variation.name}'")
        return variation

    def invalidate_all(self) -> None:
        for variation in self._entries.values():
            variation.release()

    def clear(self) -> None:
        self.invalidate_all()
        self._entries.clear()
