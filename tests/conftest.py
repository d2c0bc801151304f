import pytest

from shaderkit.assets.cache import ResourceCache
from shaderkit.config import ShaderSettings
from shaderkit.types import BackendMode

SIMPLE_SHADER = """#version 330
attribute vec3 pos;
void VS() { gl_Position = vec4(pos, 1.0); }
void PS() { gl_FragColor = vec4(1.0); }
"""


class FakeProgram:
    def __init__(self, vertex_shader: str, fragment_shader: str):
        self.vertex_shader = vertex_shader
        self.fragment_shader = fragment_shader
        self.released = False

    def release(self):
        self.released = True


class FakeContext:
    """Stands in for moderngl.Context, records linked programs."""

    def __init__(self):
        self.programs = []
        self.error = None

    def program(self, vertex_shader: str, fragment_shader: str):
        if self.error is not None:
            raise self.error
        prog = FakeProgram(vertex_shader, fragment_shader)
        self.programs.append(prog)
        return prog


@pytest.fixture
def cache(tmp_path):
    """Resource cache rooted at a fresh temporary directory."""
    return ResourceCache(asset_root=tmp_path)


@pytest.fixture
def gl_settings():
    return ShaderSettings(backend=BackendMode.OPENGL)


@pytest.fixture
def fake_gl():
    return FakeContext()
