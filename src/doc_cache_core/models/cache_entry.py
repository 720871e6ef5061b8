"""Persisted cache entry model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DocumentData = dict[str, Any]


class CacheEntry(BaseModel):
    """A fetched document and when it was fetched, stored per path."""

    # Locked TTLs may be infinite; keep them as JSON Infinity rather than null
    model_config = ConfigDict(ser_json_inf_nan="constants")

    doc: DocumentData | None = Field(description="Document payload, None if it did not exist")
    fetched_at: int = Field(description="Milliseconds since epoch when doc was fetched")
    persistent_cache_time: float | None = Field(
        default=None, description="Locked TTL in milliseconds, if one was set"
    )

    def age_ms(self, now_ms: int) -> int:
        """Milliseconds elapsed since the document was fetched."""
        return now_ms - self.fetched_at
