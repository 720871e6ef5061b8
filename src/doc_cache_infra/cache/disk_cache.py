"""diskcache-backed implementation of CacheClient."""

from __future__ import annotations

import asyncio
from pathlib import Path

import diskcache


class DiskCacheClient:
    """Persistent store backed by diskcache (SQLite under the hood)."""

    def __init__(self, cache_dir: Path) -> None:
        """Initialize with a cache directory."""
        cache_dir.mkdir(parents=True, exist_ok=True)
        self._cache = diskcache.Cache(str(cache_dir))

    async def get(self, key: str) -> str | None:
        """Retrieve a value by key."""
        result = await asyncio.to_thread(self._cache.get, key)
        if result is None:
            return None
        return str(result)

    async def set(self, key: str, value: str) -> None:
        """Store a value without expiry."""
        await asyncio.to_thread(self._cache.set, key, value)

    async def delete(self, key: str) -> None:
        """Delete a key from the store."""
        await asyncio.to_thread(self._cache.delete, key)

    async def clear(self, prefix: str = "") -> None:
        """Delete every key starting with prefix."""
        await asyncio.to_thread(self._clear_sync, prefix)

    def _clear_sync(self, prefix: str) -> None:
        if not prefix:
            self._cache.clear()
            return
        for key in list(self._cache.iterkeys()):
            if isinstance(key, str) and key.startswith(prefix):
                self._cache.delete(key)

    async def close(self) -> None:
        """Close the cache."""
        self._cache.close()
