"""Integration tests for the instance settings endpoints."""
import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def restore_limit(test_client: TestClient, content_limit: int):
    yield
    test_client.put("/api/v1/instance/settings", json={"content_length_limit": content_limit})


def test_get_settings(test_client: TestClient, content_limit: int) -> None:
    response = test_client.get("/api/v1/instance/settings")
    assert response.status_code == 200
    assert response.json() == {"content_length_limit": content_limit}


def test_lowered_limit_applies_to_new_memos(test_client: TestClient, user_headers: dict[str, str],
                                              restore_limit) -> None:
    response = test_client.put("/api/v1/instance/settings", json={"content_length_limit": 5}, headers=user_headers)
    assert response.status_code == 200
    assert response.json() == {"content_length_limit": 5}

    response = test_client.post("/api/v1/memos", json={"content": "too long"}, headers=user_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "content too long (max 5 characters)"


@pytest.mark.parametrize("limit", [0, -10])
def test_rejects_non_positive_limit(test_client: TestClient, content_limit: int, limit: int) -> None:
    response = test_client.put("/api/v1/instance/settings", json={"content_length_limit": limit})
    assert response.status_code == 422
    assert test_client.get("/api/v1/instance/settings").json() == {"content_length_limit": content_limit}
