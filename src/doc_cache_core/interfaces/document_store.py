"""Abstract remote document store interface."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from doc_cache_core.models.snapshot import DocumentSnapshot


@runtime_checkable
class DocumentStoreClient(Protocol):
    """A remote store that returns one document per logical path."""

    async def fetch_by_path(self, path: str) -> DocumentSnapshot:
        """Fetch the document at path.

        Returns a snapshot whose ``data()`` is None when no document exists.
        Raises DocumentFetchError (with a ``code``) on failure.
        """
        ...
