# shaderkit/config.py
from __future__ import annotations

import os
from dataclasses import dataclass

from shaderkit.log import logger
from shaderkit.types import BackendMode

# Rough per-object overheads used for memory accounting.
SHADER_BASE_SIZE = 256
VARIATION_SIZE = 128

_BACKEND_ALIASES = {
    "opengl": BackendMode.OPENGL,
    "gl": BackendMode.OPENGL,
    "direct3d": BackendMode.DIRECT3D,
    "d3d": BackendMode.DIRECT3D,
}


def _backend_from_env() -> BackendMode:
    value = os.getenv("SHADERKIT_BACKEND", "opengl").strip().lower()
    try:
        return _BACKEND_ALIASES[value]
    except KeyError:
        logger.warning(f"Unknown shaderkit backend '{value}', using opengl")
        return BackendMode.OPENGL


# Fixed for the lifetime of the process.
BACKEND_MODE = _backend_from_env()


@dataclass(frozen=True, slots=True)
class ShaderSettings:
    """Policy for loading shader documents and naming their variations."""

    backend: BackendMode = BACKEND_MODE
    max_include_depth: int = 64
    join_char: str = "_"
