"""Public interface re-exports for doc_cache_core."""

from doc_cache_core.interfaces.cache import CacheClient
from doc_cache_core.interfaces.document_store import DocumentStoreClient

__all__ = [
    "CacheClient",
    "DocumentStoreClient",
]
