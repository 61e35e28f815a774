"""
Shared test fixtures and utilities.

Tests run against the in-memory store with a fixed JWT secret and cheap
bcrypt rounds. The environment is set before any application import so the
module-level ``api.app`` picks it up too.
"""

import os

os.environ["STORAGE_BACKEND"] = "memory"
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "development"

import pytest
from datetime import datetime, timezone, timedelta
from typing import Callable, Optional
import jwt  # PyJWT
from fastapi.testclient import TestClient

from api.app import create_app
from shared.config import get_settings


# Test JWT secret (only for testing - matches the environment above)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"
TEST_PASSWORD = "secret123"


def create_test_token(
    user_id: str = "00000000-0000-0000-0000-000000000001",
    username: str = "tester",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a signed JWT for authentication tests.

    Args:
        user_id: Value of the ``sub`` claim
        username: Value of the ``username`` claim
        expired: If True, creates an expired token
        secret: Signing key; pass another value to forge a bad signature

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    issued = now - timedelta(days=8) if expired else now
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "username": username,
        "exp": int(exp.timestamp()),
        "iat": int(issued.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture(autouse=True)
def fresh_state():
    """Fresh settings for every test. Each app builds its own container and store."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Factory for signed test tokens."""
    return create_test_token


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def container(app):
    """The service container the app resolves dependencies from."""
    return app.state.container


@pytest.fixture
def client(app) -> TestClient:
    """HTTP client against a fresh app (lifespan is not run)."""
    return TestClient(app)


@pytest.fixture
def register_user(client: TestClient) -> Callable[..., dict[str, str]]:
    """
    Register and log in a user, returning Authorization headers.

    Usage:
        headers = register_user("alice")
    """

    def _register(username: str = "alice", password: Optional[str] = None) -> dict[str, str]:
        password = password or TEST_PASSWORD
        response = client.post(
            "/api/auth/register", json={"username": username, "password": password}
        )
        assert response.status_code == 201, response.text
        response = client.post(
            "/api/auth/login", json={"username": username, "password": password}
        )
        assert response.status_code == 200, response.text
        token = response.json()["data"]["token"]
        return {"Authorization": f"Bearer {token}"}

    return _register


@pytest.fixture
def auth_headers(register_user) -> dict[str, str]:
    """Authorization headers for a freshly registered user "alice"."""
    return register_user("alice")
