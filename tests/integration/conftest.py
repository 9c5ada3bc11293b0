"""Pytest fixtures for memoport integration tests.

These fixtures extend the base test fixtures from tests/conftest.py. The
framework is preconfigured once per session on top of `test_configuration`;
the TestClient context runs the app lifespan, which initializes and shuts
down services.
"""
import itertools
import uuid
from typing import Callable, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from scitrera_app_framework import Variables

from memoport_server.config import MEMOPORT_DATA_DIR

_user_ids = itertools.count(1000)


@pytest.fixture(scope="session")
def v(test_configuration: Variables, tmp_path_factory, test_logger) -> Variables:
    """Isolated, preconfigured Variables instance for the session."""
    from memoport_server.dependencies import preconfigure

    # Create session-scoped temp directory for database
    tmp_dir = tmp_path_factory.mktemp("memoport_test")
    test_configuration.set(MEMOPORT_DATA_DIR, str(tmp_dir))

    # Initialize framework in test mode (no fault handler, no pyroscope, etc.)
    v = preconfigure(v=test_configuration, test_mode=True, test_logger=test_logger)
    return v


@pytest.fixture(scope="session")
def fastapi_app(v: Variables) -> FastAPI:
    """FastAPI app instance for tests."""
    from memoport_server.lifecycle.fastapi import fastapi_app_factory
    return fastapi_app_factory(v=v)


@pytest.fixture(scope="session")
def test_client(fastapi_app: FastAPI) -> Generator[TestClient, None, None]:
    """Create TestClient for FastAPI app."""
    with TestClient(fastapi_app) as client:
        yield client


@pytest.fixture
def user_headers() -> dict[str, str]:
    """Headers for a user that no other test uses (the store is shared per session)."""
    return {"X-User-ID": str(next(_user_ids))}


@pytest.fixture
def other_user_headers() -> dict[str, str]:
    return {"X-User-ID": str(next(_user_ids))}


@pytest.fixture
def unique_uid() -> Callable[[], str]:
    """Factory for memo UIDs that are unique across the session."""
    return lambda: f"it-{uuid.uuid4().hex[:12]}"
