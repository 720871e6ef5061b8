"""Application settings using pydantic-settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from doc_cache_core.constants import (
    DEFAULT_CACHE_NAMESPACE,
    FIRESTORE_BASE_URL,
    FIRESTORE_DEFAULT_DATABASE,
)


class Settings(BaseSettings):
    """Central configuration for doc-cache."""

    model_config = SettingsConfigDict(env_prefix="DOC_CACHE_", env_file=".env")

    # --- Logging ---
    log_level: str = Field(
        default="INFO",
        description="Root log level name",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer: 'console' for humans, 'json' for collectors",
    )

    # --- Cache ---
    cache_backend: Literal["disk", "redis", "db"] = Field(
        default="disk",
        description="Key-value store backing the document cache",
    )
    cache_dir: Path = Field(
        default=Path("./.cache/doc_cache"),
        description="Directory for the diskcache store",
    )
    redis_url: str | None = Field(
        default=None,
        description="Redis URL (required if cache_backend=redis)",
    )
    database_url: str = Field(
        default="sqlite+aiosqlite:///./doc_cache.db",
        description="SQLAlchemy database URL for cache_backend=db",
    )
    cache_namespace: str = Field(
        default=DEFAULT_CACHE_NAMESPACE,
        description="Key prefix isolating document entries from other cache users",
    )

    # --- Firestore ---
    firestore_project_id: str | None = Field(
        default=None,
        description="Google Cloud project that owns the Firestore database",
    )
    firestore_database: str = Field(
        default=FIRESTORE_DEFAULT_DATABASE,
        description="Firestore database ID",
    )
    firestore_base_url: str = Field(
        default=FIRESTORE_BASE_URL,
        description="Firestore REST API base URL (point at the emulator for local runs)",
    )
    firestore_api_key: SecretStr | None = Field(
        default=None,
        description="Web API key sent as the 'key' query parameter",
    )
    firestore_access_token: SecretStr | None = Field(
        default=None,
        description="OAuth2 bearer token sent in the Authorization header",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout per remote fetch in seconds",
    )

    @model_validator(mode="after")
    def validate_cache_config(self) -> Settings:
        """Validate cache backend configuration."""
        if self.cache_backend == "redis" and not self.redis_url:
            msg = "redis_url required when cache_backend=redis"
            raise ValueError(msg)
        return self
