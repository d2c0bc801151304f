import pytest

from shaderkit.config import SHADER_BASE_SIZE, VARIATION_SIZE
from shaderkit.errors import ShaderCompileError
from shaderkit.shaders.compiler import GLSLStageCompiler, StageSource
from shaderkit.shaders.shader import Shader
from shaderkit.shaders.variation import ShaderVariation, variation_name
from shaderkit.types import ShaderStage
from tests.conftest import SIMPLE_SHADER


@pytest.fixture
def shader(cache, gl_settings):
    cache.add_source("Shaders/Basic.glsl", SIMPLE_SHADER)
    shader = Shader("Shaders/Basic.glsl", cache, gl_settings)
    assert shader.load(cache.get_file("Shaders/Basic.glsl"))
    return shader


def test_variation_name():
    assert variation_name("Shaders/Basic.glsl", "A B") == "Shaders/Basic_A_B"
    assert variation_name("Shaders/Basic.glsl", "") == "Shaders/Basic"
    assert variation_name("Basic", "SKINNED") == "Basic_SKINNED"


def test_get_variation_returns_same_instance(shader):
    first = shader.get_variation(ShaderStage.VS, "A B")
    second = shader.get_variation(ShaderStage.VS, "A B")

    assert first is second
    assert len(shader.variations(ShaderStage.VS)) == 1


def test_get_variation_canonicalizes_defines(shader):
    variation = shader.get_variation(ShaderStage.PS, "  A   B ")

    assert variation is shader.get_variation(ShaderStage.PS, "A B")
    assert variation.defines == "A B"
    assert variation.name == "Shaders/Basic_A_B"
    assert variation.stage is ShaderStage.PS
    assert " A B" in shader.variations(ShaderStage.PS)
    assert "A B" not in shader.variations(ShaderStage.VS)


def test_define_order_gives_distinct_variations(shader):
    ab = shader.get_variation(ShaderStage.VS, "A B")
    ba = shader.get_variation(ShaderStage.VS, "B A")

    assert ab is not ba
    assert ab.defines != ba.defines
    assert len(shader.variations(ShaderStage.VS)) == 2


def test_stages_have_separate_caches(shader):
    vs = shader.get_variation(ShaderStage.VS, "X")
    ps = shader.get_variation(ShaderStage.PS, "X")

    assert vs is not ps
    assert vs.name == ps.name


def test_memory_use_grows_once_per_new_variation(shader):
    base = SHADER_BASE_SIZE + len(shader.vs_source) + len(shader.ps_source)
    assert shader.memory_use == base

    shader.get_variation(ShaderStage.VS, "A")
    assert shader.memory_use == base + VARIATION_SIZE

    shader.get_variation(ShaderStage.VS, "A")
    assert shader.memory_use == base + VARIATION_SIZE

    shader.get_variation(ShaderStage.PS, "A")
    assert shader.memory_use == base + 2 * VARIATION_SIZE


def test_compile_injects_defines_after_version(shader):
    variation = shader.get_variation(ShaderStage.VS, "SKINNED COUNT=4")

    payload = variation.compile(GLSLStageCompiler())

    assert isinstance(payload, StageSource)
    assert variation.valid
    lines = payload.source.split("\n")
    assert lines[:3] == ["#version 330", "#define SKINNED", "#define COUNT 4"]
    assert "void main()" in payload.source


def test_compile_is_cached_while_valid(shader):
    variation = shader.get_variation(ShaderStage.VS, "")
    compiler = GLSLStageCompiler()

    assert variation.compile(compiler) is variation.compile(compiler)


def test_release_drops_payload_and_keeps_identity(shader):
    variation = shader.get_variation(ShaderStage.VS, "A")
    variation.compile(GLSLStageCompiler())
    generation = variation.generation

    variation.release()

    assert not variation.valid
    assert variation.payload is None
    assert variation.generation != generation
    assert variation.name == "Shaders/Basic_A"


def test_compile_failure_records_output(cache):
    shader = Shader("empty.glsl", cache)
    variation = shader.get_variation(ShaderStage.VS, "A")

    with pytest.raises(ShaderCompileError) as exc:
        variation.compile(GLSLStageCompiler())

    assert exc.value.name == "empty_A"
    assert variation.compiler_output == "empty shader source"
    assert not variation.valid


def test_variation_constructed_with_name_and_defines(shader):
    variation = ShaderVariation(
        shader, ShaderStage.VS, name="Shaders/Basic_LIT", defines="LIT"
    )

    assert variation.name == "Shaders/Basic_LIT"
    assert variation.defines == "LIT"
    assert not variation.valid
    assert variation.payload is None
    assert variation.release_listeners == []
