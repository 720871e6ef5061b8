"""Abstract key-value store interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheClient(Protocol):
    """Abstract async key-value store — implementations can be swapped.

    Stores carry no expiry policy of their own; freshness is decided by
    the caller from what it stored.
    """

    async def get(self, key: str) -> str | None:
        """Retrieve a value by key, or None if not found."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Store a value under key, replacing any previous value."""
        ...

    async def delete(self, key: str) -> None:
        """Delete a key from the store."""
        ...

    async def clear(self, prefix: str = "") -> None:
        """Delete every key starting with prefix (all keys when empty)."""
        ...

    async def close(self) -> None:
        """Release the underlying connection or file handles."""
        ...
