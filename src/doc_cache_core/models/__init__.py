"""Domain models for doc-cache."""

from doc_cache_core.models.cache_entry import CacheEntry, DocumentData
from doc_cache_core.models.options import (
    CacheOptions,
    CacheTime,
    GetDocumentOptions,
    RetryOptions,
)
from doc_cache_core.models.snapshot import DocumentSnapshot

__all__ = [
    "CacheEntry",
    "CacheOptions",
    "CacheTime",
    "DocumentData",
    "DocumentSnapshot",
    "GetDocumentOptions",
    "RetryOptions",
]
