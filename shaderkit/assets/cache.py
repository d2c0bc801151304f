# shaderkit/assets/cache.py
from __future__ import annotations

import posixpath
from pathlib import Path
from typing import Dict, List, Optional, Set

from shaderkit.assets.stream import SourceStream, TextStream
from shaderkit.config import ShaderSettings
from shaderkit.log import logger
from shaderkit.shaders.shader import Shader


def _key(name: str) -> str:
    return posixpath.normpath(name.replace("\\", "/"))


class ResourceCache:
    """
    Supplies shader sources by name and tracks include dependencies.

    Sources registered with add_source() take precedence over files
    under `asset_root`. Loaded shaders are cached by name, and
    reload_resource() reloads every shader depending on a changed file.
    """

    def __init__(self, asset_root: Optional[Path] = None) -> None:
        self.root = asset_root
        self._sources: Dict[str, str] = {}
        self._shaders: Dict[str, Shader] = {}
        self._dependents: Dict[str, Set[Shader]] = {}

    def add_source(self, name: str, text: str) -> None:
        self._sources[_key(name)] = text

    def remove_source(self, name: str) -> None:
        self._sources.pop(_key(name), None)

    def get_file(self, name: str) -> Optional[SourceStream]:
        """Open a source by name, or None if it does not exist."""
        key = _key(name)
        if key in self._sources:
            return TextStream(name, self._sources[key])

        if self.root is None:
            return None

        path = self.root / key
        if not path.is_file():
            return None
        try:
            return TextStream.from_file(path, name)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not open resource '{name}': {e}")
            return None

    def store_resource_dependency(self, owner: Shader, name: str) -> None:
        self._dependents.setdefault(_key(name), set()).add(owner)

    def reset_dependencies(self, owner: Shader) -> None:
        for key in list(self._dependents):
            owners = self._dependents[key]
            owners.discard(owner)
            if not owners:
                del self._dependents[key]

    def dependents(self, name: str) -> List[Shader]:
        return sorted(self._dependents.get(_key(name), ()), key=lambda s: s.name)

    def get_shader(
        self, name: str, settings: Optional[ShaderSettings] = None
    ) -> Optional[Shader]:
        """
        Return the cached shader, loading it on first request.

        The settings of the first load win. Asking again with different
        settings logs a warning and returns the cached shader.
        """
        key = _key(name)
        if key in self._shaders:
            shader = self._shaders[key]
            if settings is not None and settings != shader.settings:
                logger.warning(
                    f"Shader '{name}' is already loaded with {shader.settings}, "
                    f"ignoring {settings}"
                )
            return shader

        source = self.get_file(name)
        if source is None:
            logger.error(f"Could not find shader '{name}'")
            return None

        shader = Shader(name, self, settings)
        if not shader.load(source):
            shader.destroy()
            return None

        self._shaders[key] = shader
        return shader

    def release_shader(self, name: str) -> bool:
        shader = self._shaders.pop(_key(name), None)
        if shader is None:
            return False

        shader.destroy()
        return True

    def reload_resource(self, name: str) -> List[str]:
        """
        Reload the named shader and every shader including the named file.

        Returns the names of the shaders that reloaded successfully.
        """
        key = _key(name)
        reloaded: List[str] = []

        shader = self._shaders.get(key)
        if shader is not None and shader.reload():
            reloaded.append(shader.name)

        for owner in self.dependents(name):
            if owner is shader:
                continue
            if owner.reload():
                reloaded.append(owner.name)

        logger.debug(f"Resource '{name}' changed, reloaded {reloaded}")
        return reloaded
