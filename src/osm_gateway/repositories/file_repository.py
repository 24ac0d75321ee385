"""Local-disk implementation of CacheStore.

Each entry is a single JSON file named after its key inside the cache
directory. It's the default implementation and satisfies the CacheStore
protocol.
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from osm_gateway.config import settings
from osm_gateway.errors import CacheIOError

logger = logging.getLogger(__name__)

SUFFIX = ".json"


class FileCacheRepository:
    """File-per-key cache on local disk.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Writes go to a temporary file in the cache directory which is then
    renamed over the target, so readers see either the old or the new
    document, never a partial one. Blocking file I/O runs in a worker
    thread to keep the event loop free.
    """

    backend_name = "file"

    def __init__(self, cache_dir: str | os.PathLike[str] | None = None) -> None:
        """Initialize the file cache repository.

        Args:
            cache_dir: Directory holding the entries. Created if missing.
                Defaults to settings.cache_dir.
        """
        self._dir = Path(cache_dir or settings.cache_dir)
        self._dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def create(cls, cache_dir: str | os.PathLike[str] | None = None) -> "FileCacheRepository":
        """Factory method to create FileCacheRepository with defaults.

        Args:
            cache_dir: Cache directory. If None, uses settings.

        Returns:
            Configured FileCacheRepository
        """
        return cls(cache_dir=cache_dir)

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}{SUFFIX}"

    async def get(self, key: str) -> Any | None:
        """Read an entry from disk.

        Args:
            key: The cache key

        Returns:
            The decoded document, or None if missing, unreadable or corrupt
        """
        return await asyncio.to_thread(self._read, key)

    def _read(self, key: str) -> Any | None:
        path = self._path(key)
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Cache read failed for %s: %s", key, e)
            return None
        except UnicodeDecodeError as e:
            logger.warning("Corrupt cache entry %s, treating as miss: %s", key, e)
            return None

        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            logger.warning("Corrupt cache entry %s, treating as miss: %s", key, e)
            return None

    async def set(self, key: str, value: Any) -> None:
        """Write an entry to disk, replacing any previous one.

        Args:
            key: The cache key
            value: JSON-serializable document

        Raises:
            CacheIOError: If serialization or the write fails
        """
        await asyncio.to_thread(self._write, key, value)

    def _write(self, key: str, value: Any) -> None:
        try:
            content = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise CacheIOError(key, f"value is not JSON serializable: {e}") from e

        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self._dir, prefix=f".{key}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            os.replace(tmp_name, self._path(key))
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise CacheIOError(key, f"write failed: {e}") from e

    async def delete(self, key: str) -> None:
        """Delete an entry from disk.

        Args:
            key: The cache key

        Raises:
            CacheIOError: If the entry does not exist or cannot be removed
        """
        await asyncio.to_thread(self._unlink, key)

    def _unlink(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError as e:
            raise CacheIOError(key, "no such entry", missing=True) from e
        except OSError as e:
            raise CacheIOError(key, f"delete failed: {e}") from e

    async def count_all(self) -> int:
        """Count total entries in the cache.

        Returns:
            Total number of cached entries
        """
        return await asyncio.to_thread(lambda: sum(1 for _ in self._dir.glob(f"*{SUFFIX}")))

    async def health_check(self) -> bool:
        """Check if the cache directory is writable.

        Returns:
            True if healthy, False otherwise
        """
        return self._dir.is_dir() and os.access(self._dir, os.W_OK)

    async def close(self) -> None:
        """Nothing to release; files are opened per operation."""

    @property
    def cache_dir(self) -> Path:
        """Get the cache directory."""
        return self._dir
