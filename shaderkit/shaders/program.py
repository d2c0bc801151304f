# shaderkit/shaders/program.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import moderngl

from shaderkit.errors import ShaderCompileError
from shaderkit.log import logger
from shaderkit.shaders.compiler import GLSLStageCompiler, StageCompiler
from shaderkit.shaders.variation import ShaderVariation
from shaderkit.types import ShaderStage


@dataclass(frozen=True)
class ProgramHandle:
    """Linked ModernGL program for one vertex/pixel variation pair."""

    program: moderngl.Program
    label: str


class ProgramLinker:
    """
    Links vertex and pixel variations into GPU programs.

    Programs are keyed by the generations of both variations. Releasing
    either variation (shader reload or destroy) frees its programs, and
    the next link() compiles and links again.
    """

    def __init__(
        self, gl: moderngl.Context, compiler: Optional[StageCompiler] = None
    ) -> None:
        self._gl = gl
        self._compiler = compiler or GLSLStageCompiler()
        self._programs: Dict[Tuple[int, int], ProgramHandle] = {}

    def __len__(self) -> int:
        return len(self._programs)

    def link(self, vs: ShaderVariation, ps: ShaderVariation) -> ProgramHandle:
        if vs.stage is not ShaderStage.VS or ps.stage is not ShaderStage.PS:
            raise ValueError(
                f"Expected a vertex and a pixel variation, got {vs.stage.name} "
                f"and {ps.stage.name}"
            )

        key = (vs.generation, ps.generation)
        cached = self._programs.get(key)
        if cached is not None:
            return cached

        vs_source = vs.compile(self._compiler)
        ps_source = ps.compile(self._compiler)

        label = f"{vs.name}|{ps.name}"
        try:
            program = self._gl.program(
                vertex_shader=vs_source.source, fragment_shader=ps_source.source
            )
        except moderngl.Error as e:
            logger.error(f"Shader program link failed for '{label}': {e}")
            raise ShaderCompileError(label, str(e)) from e

        handle = ProgramHandle(program=program, label=label)
        self._programs[key] = handle
        for variation in (vs, ps):
            if self._on_variation_released not in variation.release_listeners:
                variation.release_listeners.append(self._on_variation_released)
        return handle

    def _on_variation_released(
        self, variation: ShaderVariation, generation: int
    ) -> None:
        # Generations are unique across all variations
        for key in [k for k in self._programs if generation in k]:
            self._programs.pop(key).program.release()

    def release(self) -> None:
        for handle in self._programs.values():
            handle.program.release()
        self._programs.clear()
