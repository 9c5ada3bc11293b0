"""
Pytest configuration and fixtures for memoport tests.

Unit tests build services directly on top of a fresh storage backend per
test. Integration tests (see tests/integration/conftest.py) go through the
scitrera-app-framework plugin wiring with an isolated Variables instance that
does NOT pull from environment variables.

Usage in tests:
    async def test_something(reconciler, identity):
        result = await reconciler.reconcile(identity, record, ImportOptions())
"""
import logging
from datetime import datetime, timezone

import pytest
import pytest_asyncio

from scitrera_app_framework import Variables

from memoport_server.config import (
    MEMOPORT_STORAGE_BACKEND,
    MEMOPORT_REFERENCE_IMPORTER,
    MEMOPORT_CONTENT_LENGTH_LIMIT,
)
from memoport_server.models import AuthIdentity, Record
from memoport_server.services.storage.in_memory import MemoryStorageBackend
from memoport_server.services.storage.sqlite import SQLiteStorageBackend
from memoport_server.services.instance_settings import DefaultInstanceSettingsService
from memoport_server.services.reference_importer import NoneReferenceImporter
from memoport_server.services.reconciler import DefaultImportReconciler
from memoport_server.services.snapshot import DefaultSnapshotBuilder
from memoport_server.services.memo import DefaultMemoService
from memoport_server.services.transfer import DefaultTransferService

TEST_CONTENT_LENGTH_LIMIT = 1024


# -----------------------------------------------------------------------------
# Logging Configuration (initialized by test harness, not framework)
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def test_logger() -> logging.Logger:
    """
    Create a root logger for tests.

    The test harness owns logging configuration, not the framework.
    """
    logger = logging.getLogger("memoport-test")
    logger.setLevel(logging.DEBUG)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(logging.DEBUG)
        formatter = logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s %(funcName)s() > %(message)s',
            datefmt='%Y/%m/%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


@pytest.fixture(scope="session")
def test_configuration() -> Variables:
    """
    Isolated Variables instance with explicit configuration for tests.
    """
    v = Variables()
    v.set(MEMOPORT_STORAGE_BACKEND, "sqlite")
    v.set(MEMOPORT_REFERENCE_IMPORTER, "none")
    v.set(MEMOPORT_CONTENT_LENGTH_LIMIT, TEST_CONTENT_LENGTH_LIMIT)
    return v


# -----------------------------------------------------------------------------
# Storage Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def temp_db_path(tmp_path):
    """Temporary database path for tests that need their own SQLite storage."""
    return tmp_path / "test_storage.db"


@pytest_asyncio.fixture
async def memory_storage():
    backend = MemoryStorageBackend()
    await backend.connect()
    yield backend
    await backend.disconnect()


@pytest_asyncio.fixture
async def sqlite_storage(temp_db_path):
    backend = SQLiteStorageBackend(str(temp_db_path))
    await backend.connect()
    yield backend
    await backend.disconnect()


@pytest_asyncio.fixture(params=["memory", "sqlite"])
async def storage(request, temp_db_path):
    """Connected storage backend; tests using it run against both providers."""
    if request.param == "memory":
        backend = MemoryStorageBackend()
    else:
        backend = SQLiteStorageBackend(str(temp_db_path))
    await backend.connect()
    yield backend
    await backend.disconnect()


# -----------------------------------------------------------------------------
# Service Fixtures (constructed directly, no plugin wiring)
# -----------------------------------------------------------------------------

@pytest.fixture
def content_limit() -> int:
    return TEST_CONTENT_LENGTH_LIMIT


@pytest.fixture
def instance_settings(storage):
    return DefaultInstanceSettingsService(storage, default_content_length_limit=TEST_CONTENT_LENGTH_LIMIT)


@pytest.fixture
def reconciler(storage, instance_settings):
    return DefaultImportReconciler(storage, instance_settings, NoneReferenceImporter())


@pytest.fixture
def snapshot_builder(storage):
    return DefaultSnapshotBuilder(storage)


@pytest.fixture
def memo_service(storage, instance_settings):
    return DefaultMemoService(storage, instance_settings)


@pytest.fixture
def transfer_service(snapshot_builder, reconciler):
    return DefaultTransferService(snapshot_builder, reconciler)


# -----------------------------------------------------------------------------
# Test Data Factories
# -----------------------------------------------------------------------------

@pytest.fixture
def identity() -> AuthIdentity:
    return AuthIdentity(user_id=1)


@pytest.fixture
def other_identity() -> AuthIdentity:
    return AuthIdentity(user_id=2)


@pytest.fixture
def make_record():
    """Factory for snapshot records with sensible defaults."""

    def _make(uid: str, content: str = "hello #world", **kwargs) -> Record:
        kwargs.setdefault("created_at", datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc))
        kwargs.setdefault("updated_at", datetime(2024, 1, 16, 8, 0, tzinfo=timezone.utc))
        return Record(uid=uid, content=content, **kwargs)

    return _make
