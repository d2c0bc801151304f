# shaderkit/shaders/__init__.py
from shaderkit.shaders.compiler import GLSLStageCompiler, StageCompiler, StageSource
from shaderkit.shaders.defines import canonicalize_defines, defines_hash
from shaderkit.shaders.includes import IncludeResolver, ResolvedSource
from shaderkit.shaders.program import ProgramHandle, ProgramLinker
from shaderkit.shaders.shader import Shader
from shaderkit.shaders.splitter import SplitConfig, StageSources, split_stages
from shaderkit.shaders.variation import ShaderVariation, VariationCache

__all__ = [
    "GLSLStageCompiler",
    "IncludeResolver",
    "ProgramHandle",
    "ProgramLinker",
    "ResolvedSource",
    "Shader",
    "ShaderVariation",
    "SplitConfig",
    "StageCompiler",
    "StageSource",
    "StageSources",
    "VariationCache",
    "canonicalize_defines",
    "defines_hash",
    "split_stages",
]
