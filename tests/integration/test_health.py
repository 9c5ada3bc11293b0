"""Integration tests for health check endpoints."""
from fastapi.testclient import TestClient
from scitrera_app_framework import Variables

from memoport_server.services.storage import get_storage_backend


def test_health_check(test_client: TestClient) -> None:
    """Test basic health check endpoint."""
    response = test_client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"


def test_readiness_check(test_client: TestClient) -> None:
    """Storage is connected by the app lifespan, so the server is ready."""
    response = test_client.get("/health/ready")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "ready"
    assert data["services"]["database"] == "connected"


def test_readiness_reports_unavailable_storage(test_client: TestClient, v: Variables, monkeypatch) -> None:
    async def offline():
        return False

    monkeypatch.setattr(get_storage_backend(v), "health_check", offline)

    response = test_client.get("/health/ready")
    assert response.status_code == 503
    assert response.json() == {"status": "not_ready", "services": {"database": "disconnected"}}


def test_root_endpoint(test_client: TestClient) -> None:
    """Test root endpoint returns API information."""
    response = test_client.get("/")
    assert response.status_code == 200

    data = response.json()
    assert data["name"] == "memoport"
    assert "version" in data
    assert "description" in data
