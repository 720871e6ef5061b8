"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from doc_cache_infra.cache.disk_cache import DiskCacheClient
from doc_cache_infra.cache.document_store import DocumentCacheStore
from tests.mocks.mock_document_store import FakeClock, StubDocumentClient
from tests.mocks.mock_settings import make_settings


@pytest.fixture
def mock_settings() -> MagicMock:
    """Return a MagicMock Settings with sensible defaults."""
    return make_settings()


@pytest.fixture
async def disk_cache(tmp_path: Path) -> AsyncGenerator[DiskCacheClient, None]:
    """Return a DiskCacheClient in a temporary directory."""
    client = DiskCacheClient(tmp_path / "cache")
    yield client
    await client.close()


@pytest.fixture
def document_store(disk_cache: DiskCacheClient) -> DocumentCacheStore:
    """Return a DocumentCacheStore over the temporary disk cache."""
    return DocumentCacheStore(disk_cache)


@pytest.fixture
def stub_client() -> StubDocumentClient:
    """Return a remote store holding one document at 'docs/p'."""
    return StubDocumentClient({"docs/p": {"v": 1}})


@pytest.fixture
def clock() -> FakeClock:
    """Return a hand-driven millisecond clock."""
    return FakeClock()


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None, None, None]:
    """Save and restore root logger handlers around tests that configure logging."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.level = original_level
