"""Redis-backed implementation of CacheClient."""

from __future__ import annotations

import re

from redis.asyncio import Redis

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


class RedisCacheClient:
    """Persistent store backed by Redis."""

    def __init__(self, redis: Redis) -> None:  # type: ignore[type-arg]
        """Initialize with a redis-py asyncio client."""
        self._redis = redis

    async def get(self, key: str) -> str | None:
        """Retrieve a value by key."""
        value = await self._redis.get(key)
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    async def set(self, key: str, value: str) -> None:
        """Store a value without expiry."""
        await self._redis.set(name=key, value=value)

    async def delete(self, key: str) -> None:
        """Delete a key from the store."""
        await self._redis.delete(key)

    async def clear(self, prefix: str = "") -> None:
        """Delete every key starting with prefix, using SCAN to stay non-blocking."""
        pattern = _GLOB_SPECIAL.sub(r"\\\1", prefix) + "*"
        keys = [key async for key in self._redis.scan_iter(match=pattern)]
        if keys:
            await self._redis.delete(*keys)

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self._redis.aclose()  # type: ignore[attr-defined]
