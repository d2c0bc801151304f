# shaderkit/shaders/shader.py
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional

from shaderkit.assets.stream import SourceStream
from shaderkit.config import SHADER_BASE_SIZE, VARIATION_SIZE, ShaderSettings
from shaderkit.errors import (
    IncludeResolutionError,
    MissingSubsystemError,
    ShaderError,
)
from shaderkit.log import logger
from shaderkit.shaders.includes import IncludeResolver
from shaderkit.shaders.splitter import split_for_backend
from shaderkit.shaders.variation import ShaderVariation, VariationCache
from shaderkit.types import ShaderName, ShaderStage

if TYPE_CHECKING:
    from shaderkit.assets.cache import ResourceCache


class Shader:
    """
    Shader document holding vertex and pixel stage sources.

    Both stages are derived from one combined source file, with includes
    expanded. Variations per define combination are created lazily with
    get_variation() and are invalidated on every successful reload.
    """

    def __init__(
        self,
        name: str,
        cache: Optional[ResourceCache],
        settings: Optional[ShaderSettings] = None,
    ) -> None:
        self.name = ShaderName(name)
        self.settings = settings or ShaderSettings()
        self._cache = cache

        self._vs_source = ""
        self._ps_source = ""
        self.includes: tuple[str, ...] = ()
        self.memory_use = SHADER_BASE_SIZE

        self._variations = {
            ShaderStage.VS: VariationCache(self, ShaderStage.VS),
            ShaderStage.PS: VariationCache(self, ShaderStage.PS),
        }

    def __repr__(self) -> str:
        return f"Shader({self.name!r})"

    @property
    def vs_source(self) -> str:
        return self._vs_source

    @property
    def ps_source(self) -> str:
        return self._ps_source

    def source_code(self, stage: ShaderStage) -> str:
        return self._vs_source if stage is ShaderStage.VS else self._ps_source

    def variations(self, stage: ShaderStage) -> VariationCache:
        return self._variations[stage]

    def add_memory_use(self, size: int) -> None:
        self.memory_use += size

    def load(self, source: SourceStream) -> bool:
        """
        Load the combined source, resolve includes and split it into stages.

        On failure the error is logged, False is returned and the previous
        sources and variations are left as they were.
        """
        try:
            text, includes = self._resolve(source)
        except ShaderError as e:
            logger.error(f"Failed to load shader '{self.name}': {e}")
            return False

        stages = split_for_backend(text, self.settings.backend)

        # Previously created variations must be recompiled against the new source
        for cache in self._variations.values():
            cache.invalidate_all()

        self._vs_source = stages.vs
        self._ps_source = stages.ps
        self.includes = includes

        num_variations = sum(len(cache) for cache in self._variations.values())
        self.memory_use = (
            SHADER_BASE_SIZE
            + len(self._vs_source)
            + len(self._ps_source)
            + num_variations * VARIATION_SIZE
        )

        logger.debug(
            f"Loaded shader '{self.name}' ({len(includes)} includes, "
            f"{num_variations} variations invalidated)"
        )
        return True

    def _resolve(self, source: SourceStream) -> tuple[str, tuple[str, ...]]:
        if self._cache is None:
            raise MissingSubsystemError("resource cache", self.name)

        resolver = IncludeResolver(
            self._cache, self.name, max_depth=self.settings.max_include_depth
        )
        try:
            resolved = resolver.resolve(source)
        except IncludeResolutionError as e:
            # Also track the missing file so that adding it triggers a reload
            self._store_dependencies([*resolver.includes, e.include_name])
            raise

        self._store_dependencies(resolved.includes)
        return resolved.text, resolved.includes

    def _store_dependencies(self, names: Iterable[str]) -> None:
        assert self._cache is not None
        for name in names:
            if name != self.name:
                self._cache.store_resource_dependency(self, name)

    def reload(self) -> bool:
        """Re-read this shader's own file through the resource cache."""
        if self._cache is None:
            logger.error(f"Cannot reload shader '{self.name}': no resource cache")
            return False

        source = self._cache.get_file(self.name)
        if source is None:
            logger.error(f"Cannot reload shader '{self.name}': file not found")
            return False

        return self.load(source)

    def get_variation(self, stage: ShaderStage, defines: str = "") -> ShaderVariation:
        return self._variations[stage].get_or_create(defines)

    def destroy(self) -> None:
        for cache in self._variations.values():
            cache.clear()

        if self._cache is not None:
            self._cache.reset_dependencies(self)
