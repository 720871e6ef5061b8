"""Factory functions for creating stores and clients from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from doc_cache_core.exceptions import ConfigurationError
from doc_cache_core.interfaces.cache import CacheClient
from doc_cache_core.interfaces.document_store import DocumentStoreClient
from doc_cache_infra.cache.document_store import DocumentCacheStore

if TYPE_CHECKING:
    from doc_cache_core.config.settings import Settings


async def create_cache_client(settings: Settings) -> CacheClient:
    """Create the key-value store selected by ``settings.cache_backend``."""
    if settings.cache_backend == "redis":
        from redis.asyncio import Redis

        from doc_cache_infra.cache.redis_cache import RedisCacheClient

        return RedisCacheClient(Redis.from_url(str(settings.redis_url)))

    if settings.cache_backend == "db":
        from doc_cache_infra.cache.db_cache import DBCacheClient
        from doc_cache_infra.db.engine import create_engine
        from doc_cache_infra.db.session import create_session_factory, init_db

        engine = create_engine(settings)
        await init_db(engine)
        return DBCacheClient(create_session_factory(engine)(), engine=engine)

    from doc_cache_infra.cache.disk_cache import DiskCacheClient

    return DiskCacheClient(settings.cache_dir)


def create_document_cache_store(settings: Settings, cache: CacheClient) -> DocumentCacheStore:
    """Wrap a key-value store in the configured document namespace."""
    return DocumentCacheStore(cache, namespace=settings.cache_namespace)


def create_document_client(settings: Settings) -> DocumentStoreClient:
    """Create the Firestore REST client from settings."""
    if not settings.firestore_project_id:
        msg = "firestore_project_id is required to fetch documents"
        raise ConfigurationError(msg)

    from doc_cache_engine.tools.firestore import FirestoreRestClient

    return FirestoreRestClient(
        settings.firestore_project_id,
        database=settings.firestore_database,
        base_url=settings.firestore_base_url,
        api_key=(
            settings.firestore_api_key.get_secret_value()
            if settings.firestore_api_key
            else None
        ),
        access_token=(
            settings.firestore_access_token.get_secret_value()
            if settings.firestore_access_token
            else None
        ),
        timeout=settings.request_timeout_seconds,
    )
