"""Cached, retrying single-document reads."""

from __future__ import annotations

import time
from collections.abc import Callable

import structlog

from doc_cache_core.interfaces.document_store import DocumentStoreClient
from doc_cache_core.models.cache_entry import CacheEntry, DocumentData
from doc_cache_core.models.options import GetDocumentOptions
from doc_cache_engine.decision import UseCached, decide
from doc_cache_engine.retry import RetryingFetcher
from doc_cache_infra.cache.document_store import DocumentCacheStore

logger = structlog.get_logger()

Clock = Callable[[], int]


def now_ms() -> int:
    """Current wall-clock time in milliseconds since epoch."""
    return time.time_ns() // 1_000_000


class DocumentReader:
    """Reads documents through the local cache and the retrying fetcher.

    Concurrent reads of the same path are not coordinated; the last write
    to the store wins.
    """

    def __init__(
        self,
        client: DocumentStoreClient,
        store: DocumentCacheStore,
        *,
        fetcher: RetryingFetcher | None = None,
        clock: Clock = now_ms,
    ) -> None:
        """Initialize with a remote client, a cache store, and optional overrides."""
        self._store = store
        self._fetcher = fetcher or RetryingFetcher(client)
        self._clock = clock

    async def get(
        self, path: str, options: GetDocumentOptions | None = None
    ) -> DocumentData | None:
        """Return the document at path, or None if it does not exist."""
        options = options or GetDocumentOptions()
        entry = await self._store.get(path)
        decision = decide(path, entry, options.cache_options, self._clock())

        if isinstance(decision, UseCached):
            logger.debug("cache_hit", path=path, reason=decision.reason.value)
            return decision.doc

        if decision.invalidate:
            await self._store.delete(path)

        snapshot = await self._fetcher.fetch(path, options.retry_options)
        doc = snapshot.data()

        if decision.store:
            new_entry = CacheEntry(
                doc=doc,
                fetched_at=self._clock(),
                persistent_cache_time=decision.locked_time,
            )
            await self._store.set(path, new_entry)
            logger.debug(
                "cache_entry_stored",
                path=path,
                locked_time=decision.locked_time,
                reason=decision.reason.value,
            )
        return doc


async def get_document(
    client: DocumentStoreClient,
    path: str,
    options: GetDocumentOptions | None = None,
    *,
    store: DocumentCacheStore,
) -> DocumentData | None:
    """Fetch a single document, applying cache and retry options.

    There are two kinds of cache time. A one-time cache time
    (``cache_time.time``) applies to this call only. Setting
    ``cache_time.locked`` as well stores that time as the path's locked cache
    time for later calls. An existing lock can be skipped for one call with
    ``cache_time.bypass_locked_time``.

    Raises the remote store's error, NonRetryableError, or the key-value
    store's own error.
    """
    return await DocumentReader(client, store).get(path, options)
