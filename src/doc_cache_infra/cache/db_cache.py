"""Database-backed implementation of CacheClient using a key/value table."""

from __future__ import annotations

from sqlalchemy import String, Text, delete
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.orm import Mapped, mapped_column

from doc_cache_infra.db.models import Base


class CacheRecord(Base):
    """Simple key/value table."""

    __tablename__ = "cache_records"

    key: Mapped[str] = mapped_column(String(512), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)


class DBCacheClient:
    """Store implementation backed by the application's database."""

    def __init__(self, session: AsyncSession, engine: AsyncEngine | None = None) -> None:
        """Initialize with an async SQLAlchemy session and, optionally, the engine it owns."""
        self._session = session
        self._engine = engine

    async def get(self, key: str) -> str | None:
        """Retrieve a value by key, or None if missing."""
        record = await self._session.get(CacheRecord, key)
        if record is None:
            return None
        return record.value

    async def set(self, key: str, value: str) -> None:
        """Insert or overwrite a value."""
        record = await self._session.get(CacheRecord, key)
        if record is None:
            self._session.add(CacheRecord(key=key, value=value))
        else:
            record.value = value
        await self._session.commit()

    async def delete(self, key: str) -> None:
        """Delete a key from the store."""
        record = await self._session.get(CacheRecord, key)
        if record is None:
            return
        await self._session.delete(record)
        await self._session.commit()

    async def clear(self, prefix: str = "") -> None:
        """Delete every key starting with prefix."""
        stmt = delete(CacheRecord)
        if prefix:
            stmt = stmt.where(CacheRecord.key.startswith(prefix, autoescape=True))
        await self._session.execute(stmt)
        await self._session.commit()
        self._session.expunge_all()

    async def close(self) -> None:
        """Close the session, disposing the engine if this client owns it."""
        await self._session.close()
        if self._engine is not None:
            await self._engine.dispose()
