"""BMP image loading with a small cache."""

from __future__ import annotations

import io

import pygame

from .filemanager import FileManager
from .lru import LRUCache


class SurfaceManager:
    """Decodes BMP files served by a ``FileManager`` into pygame surfaces."""

    def __init__(self, file_manager: FileManager, cache_size: int = 4) -> None:
        self._file_manager = file_manager
        self._cache: LRUCache[str, pygame.Surface] = LRUCache(cache_size)

    def get(self, path: str) -> pygame.Surface:
        """Return the surface for ``path``; raise ``ValueError`` if not a BMP."""
        if path in self._cache:
            return self._cache.get(path)

        data = self._file_manager.get(path)
        if not data.startswith(b"BM"):
            raise ValueError(f"Can't create surface from file {path}")
        try:
            surface = pygame.image.load(io.BytesIO(data), "surface.bmp")
        except pygame.error as exc:
            raise ValueError(f"Can't create surface from file {path}") from exc

        self._cache.put(path, surface)
        return surface