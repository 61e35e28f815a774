"""Tests for health check endpoints."""

from unittest.mock import PropertyMock, patch

from api.dependencies import ServiceContainer


def test_health_check(client):
    """Test the health check endpoint returns healthy status."""
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "version": "0.1.0"}


def test_readiness_check(client):
    """Test the readiness check endpoint against the memory store."""
    response = client.get("/api/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "storage": "memory"}


def test_readiness_check_store_down(client):
    """Should answer 503 when the store cannot be reached."""
    with patch.object(
        ServiceContainer,
        "category_repository",
        new_callable=PropertyMock,
        side_effect=RuntimeError("Supabase configuration missing"),
    ):
        response = client.get("/api/ready")
    assert response.status_code == 503
    assert response.json()["status"] == "unavailable"


def test_health_is_public(client):
    """Health endpoints need no token."""
    assert client.get("/api/health").status_code == 200
