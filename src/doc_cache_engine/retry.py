"""Bounded retries around the remote document fetch."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from functools import partial

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from doc_cache_core.constants import NON_RETRYABLE_MESSAGE
from doc_cache_core.exceptions import NonRetryableError
from doc_cache_core.interfaces.document_store import DocumentStoreClient
from doc_cache_core.models.options import RetryOptions
from doc_cache_core.models.snapshot import DocumentSnapshot

logger = structlog.get_logger()

Sleep = Callable[[float], Awaitable[None]]


def error_code(error: BaseException | None) -> str | None:
    """Return the ``code`` attribute of an error, if it carries one."""
    code = getattr(error, "code", None)
    return code if isinstance(code, str) else None


def _is_allowed(error: Exception, options: RetryOptions) -> bool:
    """Whether the allow-list (if any) permits retrying this error."""
    if options.retry_on_error_code is None:
        return True
    return error_code(error) in options.retry_on_error_code


def _log_retry(path: str, retry_state: RetryCallState) -> None:
    """Log each scheduled retry."""
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "fetch_retry_scheduled",
        path=path,
        attempt=retry_state.attempt_number,
        error_code=error_code(error),
        delay_seconds=retry_state.next_action.sleep if retry_state.next_action else 0,
    )


class RetryingFetcher:
    """Fetch documents, retrying failures according to per-call RetryOptions."""

    def __init__(self, client: DocumentStoreClient, sleep: Sleep = asyncio.sleep) -> None:
        """Initialize with a remote client and the coroutine used to wait."""
        self._client = client
        self._sleep = sleep

    async def fetch(self, path: str, options: RetryOptions | None = None) -> DocumentSnapshot:
        """Fetch path, retrying on failure when options enable it.

        When the attempt budget is spent the last underlying error is raised.
        An error whose code is not in ``retry_on_error_code`` raises
        NonRetryableError while attempts remain.
        """
        options = options or RetryOptions()
        if not options.enabled:
            return await self._client.fetch_by_path(path)

        max_attempts = max(options.max_retries, 1)
        retrying = AsyncRetrying(
            stop=stop_after_attempt(max_attempts),
            wait=wait_fixed(options.retry_delay / 1000),
            retry=retry_if_not_exception_type(NonRetryableError),
            before_sleep=partial(_log_retry, path),
            sleep=self._sleep,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                try:
                    return await self._client.fetch_by_path(path)
                except Exception as exc:
                    attempts_left = attempt.retry_state.attempt_number < max_attempts
                    if attempts_left and not _is_allowed(exc, options):
                        logger.warning(
                            "fetch_not_retryable",
                            path=path,
                            attempt=attempt.retry_state.attempt_number,
                            error_code=error_code(exc),
                        )
                        raise NonRetryableError(NON_RETRYABLE_MESSAGE) from exc
                    raise
        raise AssertionError("retry loop ended without an outcome")  # pragma: no cover
