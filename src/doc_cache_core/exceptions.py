"""Custom exception hierarchy for doc-cache."""

from __future__ import annotations


class DocCacheError(Exception):
    """Base exception for all doc-cache errors."""


class DocumentFetchError(DocCacheError):
    """Raised when the remote document store fails to return a document.

    ``code`` carries the store's error code (e.g. ``"unavailable"``) and is
    what retry allow-lists are matched against.
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class NonRetryableError(DocCacheError):
    """Raised when a failed fetch's error code is not in the retry allow-list."""


class CacheEntryDecodeError(DocCacheError):
    """Raised when a stored cache value cannot be decoded into a CacheEntry."""


class ConfigurationError(DocCacheError):
    """Raised when settings are missing a value a component needs."""
