"""Game data lookup from a directory, then from a PAK archive."""

from __future__ import annotations

import os
import struct
from typing import Optional

from .lru import LRUCache

_PAK_MAGIC = b"PACK"
_HEADER = struct.Struct("<II")
_ENTRY = struct.Struct("<56sII")
_NAME_LENGTH = 56


class FileManager:
    """Loads data files, preferring loose files over archive entries."""

    def __init__(
        self,
        data_directory: str | os.PathLike[str],
        archive_path: str | os.PathLike[str],
        cache_size: int = 4,
    ) -> None:
        self.data_directory = os.fspath(data_directory)
        self.archive_path = os.fspath(archive_path)
        self._cache: LRUCache[str, bytes] = LRUCache(cache_size)

    def get(self, path: str) -> bytes:
        """Return the contents of ``path``; raise ``FileNotFoundError`` if absent."""
        if path in self._cache:
            return self._cache.get(path)

        for load in (self._from_filesystem, self._from_archive):
            data = load(path)
            if data is not None:
                self._cache.put(path, data)
                return data

        raise FileNotFoundError(f"can't find file {path}")

    def _from_filesystem(self, path: str) -> Optional[bytes]:
        try:
            with open(f"{self.data_directory}/{path}", "rb") as stream:
                return stream.read()
        except OSError:
            return None

    def _from_archive(self, path: str) -> Optional[bytes]:
        try:
            stream = open(self.archive_path, "rb")
        except OSError:
            return None

        with stream:
            if stream.read(len(_PAK_MAGIC)) != _PAK_MAGIC:
                return None
            header = stream.read(_HEADER.size)
            if len(header) < _HEADER.size:
                return None
            toc_offset, toc_bytes = _HEADER.unpack(header)
            entry_count = toc_bytes // _ENTRY.size
            if not entry_count or toc_offset < len(_PAK_MAGIC) + _HEADER.size:
                return None

            wanted = path.encode("utf-8").split(b"\0", 1)[0][:_NAME_LENGTH]
            stream.seek(toc_offset)
            for _ in range(entry_count):
                entry = stream.read(_ENTRY.size)
                if len(entry) < _ENTRY.size:
                    break
                name, offset, size = _ENTRY.unpack(entry)
                if name.split(b"\0", 1)[0] != wanted:
                    continue
                stream.seek(offset)
                return stream.read(size).ljust(size, b"\0")

        return None