"""Namespaced store of document cache entries."""

from __future__ import annotations

from pydantic import ValidationError

from doc_cache_core.constants import DEFAULT_CACHE_NAMESPACE
from doc_cache_core.exceptions import CacheEntryDecodeError
from doc_cache_core.interfaces.cache import CacheClient
from doc_cache_core.models.cache_entry import CacheEntry


class DocumentCacheStore:
    """Cache entries for fetched documents, keyed by document path."""

    def __init__(self, cache: CacheClient, namespace: str = DEFAULT_CACHE_NAMESPACE) -> None:
        """Initialize with a CacheClient implementation and key namespace."""
        self._cache = cache
        self._namespace = namespace

    def _key(self, path: str) -> str:
        """Generate a cache key from a document path."""
        return f"{self._namespace}:{path}"

    async def get(self, path: str) -> CacheEntry | None:
        """Retrieve the cache entry for a path, or None if never stored."""
        raw = await self._cache.get(self._key(path))
        if raw is None:
            return None
        try:
            return CacheEntry.model_validate_json(raw)
        except ValidationError as exc:
            raise CacheEntryDecodeError(f"Corrupt cache entry for {path!r}") from exc

    async def set(self, path: str, entry: CacheEntry) -> None:
        """Store the cache entry for a path."""
        await self._cache.set(self._key(path), entry.model_dump_json())

    async def delete(self, path: str) -> None:
        """Remove the cache entry for a path."""
        await self._cache.delete(self._key(path))

    async def clear(self) -> None:
        """Remove every document entry in this namespace."""
        await self._cache.clear(prefix=f"{self._namespace}:")
