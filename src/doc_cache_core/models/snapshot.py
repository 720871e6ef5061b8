"""Remote document snapshot."""

from __future__ import annotations

from pydantic import BaseModel, Field

from doc_cache_core.models.cache_entry import DocumentData


class DocumentSnapshot(BaseModel):
    """Result of fetching a single document from the remote store."""

    path: str = Field(description="Logical document path")
    exists: bool = Field(description="Whether a document exists at path")
    payload: DocumentData | None = Field(default=None, description="Decoded document fields")
    update_time: str | None = Field(
        default=None, description="Remote last-update timestamp, if reported"
    )

    def data(self) -> DocumentData | None:
        """Return the document payload, or None when the document does not exist."""
        if not self.exists:
            return None
        return self.payload if self.payload is not None else {}
