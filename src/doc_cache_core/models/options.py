"""Per-call cache and retry options."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from doc_cache_core.constants import DEFAULT_MAX_RETRIES, DEFAULT_RETRY_DELAY_MS


class CacheTime(BaseModel):
    """TTL settings for a single call.

    ``time`` is a one-time TTL in milliseconds unless ``locked`` is set, in
    which case it becomes the path's persisted TTL on the next fetch.
    ``float("inf")`` means the entry never goes stale.
    """

    time: float | None = Field(default=None, description="TTL in milliseconds")
    locked: bool = Field(default=False, description="Persist time as the path's locked TTL")
    bypass_locked_time: bool = Field(
        default=False, description="Ignore an existing locked TTL for this call"
    )


class CacheOptions(BaseModel):
    """Cache behaviour for a single call."""

    enabled: bool = Field(default=False, description="Read and manage the local cache")
    cache_time: CacheTime = Field(default_factory=CacheTime, description="TTL settings")
    force_refresh: bool = Field(
        default=False, description="Discard any cached entry and refetch"
    )


class RetryOptions(BaseModel):
    """Retry behaviour for the remote fetch of a single call."""

    enabled: bool = Field(default=False, description="Retry failed fetches")
    max_retries: int = Field(
        default=DEFAULT_MAX_RETRIES,
        description="Total attempt budget, first attempt included",
    )
    retry_delay: float = Field(
        default=DEFAULT_RETRY_DELAY_MS,
        description="Milliseconds to wait before each retry",
    )
    retry_on_error_code: list[str] | None = Field(
        default=None, description="Only retry errors whose code is listed"
    )

    @field_validator("max_retries", mode="before")
    @classmethod
    def default_max_retries(cls, value: object) -> object:
        """Treat an unset or zero budget as the default budget."""
        return value or DEFAULT_MAX_RETRIES

    @field_validator("retry_delay", mode="before")
    @classmethod
    def default_retry_delay(cls, value: object) -> object:
        """Treat an unset delay as no delay."""
        return value or DEFAULT_RETRY_DELAY_MS


class GetDocumentOptions(BaseModel):
    """Options accepted by get_document."""

    cache_options: CacheOptions = Field(default_factory=CacheOptions)
    retry_options: RetryOptions = Field(default_factory=RetryOptions)
