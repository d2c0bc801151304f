# shaderkit/__init__.py
from shaderkit.assets import ResourceCache, SourceStream, TextStream
from shaderkit.config import BACKEND_MODE, ShaderSettings
from shaderkit.errors import (
    IncludeResolutionError,
    MissingSubsystemError,
    ShaderCompileError,
    ShaderError,
)
from shaderkit.shaders import Shader, ShaderVariation, canonicalize_defines
from shaderkit.types import BackendMode, ShaderStage

__version__ = "0.1.0"

__all__ = [
    "BACKEND_MODE",
    "BackendMode",
    "IncludeResolutionError",
    "MissingSubsystemError",
    "ResourceCache",
    "Shader",
    "ShaderCompileError",
    "ShaderError",
    "ShaderSettings",
    "ShaderStage",
    "ShaderVariation",
    "SourceStream",
    "TextStream",
    "canonicalize_defines",
]
