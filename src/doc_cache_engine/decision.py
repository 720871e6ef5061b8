"""Cache decision engine.

Given the cached entry for a path (if any) and the caller's cache options,
decides whether the cached document can be served as-is or a fresh fetch is
needed, and if so how the result is persisted.

Two asymmetries are kept on purpose:

- ``bypass_locked_time`` skips the locked TTL for this call's freshness check
  but never clears or replaces it; only a refetch made with ``locked`` does.
- A call that sets ``locked`` on a path that already has a lock is checked
  against its *new* TTL, yet the new TTL is only written on the next fetch.

A stale refetch made without ``locked`` drops any previous lock.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

import structlog

from doc_cache_core.models.cache_entry import CacheEntry, DocumentData
from doc_cache_core.models.options import CacheOptions

logger = structlog.get_logger()


class DecisionReason(StrEnum):
    """Which branch of the decision table produced an outcome."""

    DISABLED_LOCK_FRESH = "disabled_lock_fresh"
    DISABLED = "disabled"
    NO_ENTRY = "no_entry"
    FORCE_REFRESH = "force_refresh"
    LOCK_OVERRIDE_FRESH = "lock_override_fresh"
    LOCK_FRESH = "lock_fresh"
    ONE_TIME_FRESH = "one_time_fresh"
    STALE = "stale"


@dataclass(frozen=True)
class UseCached:
    """Serve the cached document without contacting the remote store."""

    doc: DocumentData | None
    reason: DecisionReason


@dataclass(frozen=True)
class MustFetch:
    """Fetch from the remote store.

    ``store``: write the result back as a new entry.
    ``invalidate``: delete the existing entry before fetching.
    ``locked_time``: TTL to persist as the path's lock, None for no lock.
    """

    reason: DecisionReason
    store: bool = True
    invalidate: bool = False
    locked_time: float | None = None


Decision = UseCached | MustFetch


def _is_fresh(age_ms: int, ttl: float | None) -> bool:
    """A missing TTL is always stale; an infinite one never is."""
    return ttl is not None and age_ms < ttl


def decide(
    path: str,
    entry: CacheEntry | None,
    options: CacheOptions,
    now_ms: int,
) -> Decision:
    """Decide how to satisfy a read of path."""
    decision = _decide(entry, options, now_ms)
    logger.debug(
        "cache_decision",
        path=path,
        outcome=type(decision).__name__,
        reason=decision.reason.value,
    )
    return decision


def _decide(entry: CacheEntry | None, options: CacheOptions, now_ms: int) -> Decision:
    cache_time = options.cache_time
    new_lock = cache_time.time if cache_time.locked else None

    if not options.enabled:
        # A disabled cache still honours an existing lock but never writes
        if entry is not None and entry.persistent_cache_time:
            if _is_fresh(entry.age_ms(now_ms), entry.persistent_cache_time):
                return UseCached(entry.doc, DecisionReason.DISABLED_LOCK_FRESH)
        return MustFetch(DecisionReason.DISABLED, store=False)

    if entry is None:
        return MustFetch(DecisionReason.NO_ENTRY, locked_time=new_lock)

    if options.force_refresh:
        return MustFetch(DecisionReason.FORCE_REFRESH, invalidate=True, locked_time=new_lock)

    age = entry.age_ms(now_ms)
    if entry.persistent_cache_time and not cache_time.bypass_locked_time:
        if cache_time.locked:
            if _is_fresh(age, cache_time.time):
                return UseCached(entry.doc, DecisionReason.LOCK_OVERRIDE_FRESH)
        elif _is_fresh(age, entry.persistent_cache_time):
            return UseCached(entry.doc, DecisionReason.LOCK_FRESH)
    elif _is_fresh(age, cache_time.time):
        return UseCached(entry.doc, DecisionReason.ONE_TIME_FRESH)

    return MustFetch(DecisionReason.STALE, invalidate=True, locked_time=new_lock)
