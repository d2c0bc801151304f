# shaderkit/assets/__init__.py
from shaderkit.assets.cache import ResourceCache
from shaderkit.assets.stream import SourceStream, TextStream, directory_of

__all__ = [
    "ResourceCache",
    "SourceStream",
    "TextStream",
    "directory_of",
]
