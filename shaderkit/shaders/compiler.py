# shaderkit/shaders/compiler.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List

from shaderkit.errors import ShaderCompileError
from shaderkit.shaders.defines import split_define
from shaderkit.types import ShaderStage


@dataclass(frozen=True, slots=True)
class StageSource:
    """Stage source with its defines applied, ready for the driver."""

    stage: ShaderStage
    source: str
    defines: str


def inject_defines(source: str, defines: str) -> str:
    """
    Insert one #define per token. Defines go right after the #version
    line, which the driver requires to come first.
    """
    tokens = [t for t in defines.split(" ") if t]
    if not tokens:
        return source

    define_lines: List[str] = []
    for token in tokens:
        name, value = split_define(token)
        define_lines.append(f"#define {name} {value}".rstrip())

    lines = source.split("\n")
    insert_at = 0
    for i, line in enumerate(lines):
        if line.lstrip().startswith("#version"):
            insert_at = i + 1
            break

    lines[insert_at:insert_at] = define_lines
    return "\n".join(lines)


class StageCompiler(ABC):
    @abstractmethod
    def compile(self, stage: ShaderStage, source: str, defines: str) -> Any:
        """
        Turn one stage source plus canonical defines into a payload.

        Raises:
            ShaderCompileError: If the source cannot be compiled.
        """
        pass


class GLSLStageCompiler(StageCompiler):
    """Prepares GLSL stage sources. Linking happens in ProgramLinker."""

    def compile(self, stage: ShaderStage, source: str, defines: str) -> StageSource:
        if not source.strip():
            raise ShaderCompileError(stage.value, "empty shader source")

        return StageSource(
            stage=stage, source=inject_defines(source, defines), defines=defines
        )
