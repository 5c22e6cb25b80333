"""Shared fixtures: a fresh app per test and two independently logged-in clients."""

import pytest
from fastapi.testclient import TestClient

from questlog.app import create_app
from questlog.config import Settings

PASSWORD = "Abcdef12"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        SECRET_KEY="test-secret",
        STORAGE_BACKEND="memory",
        DATABASE_PATH=str(tmp_path / "questlog.db"),
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def other_client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def register():
    """Register a user on a client, leaving that client logged in."""
    def _register(client: TestClient, username: str, password: str = PASSWORD) -> dict:
        response = client.post("/api/register", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return response.json()

    return _register


@pytest.fixture
def alice(client, register):
    return register(client, "alice")


@pytest.fixture
def bob(other_client, register):
    return register(other_client, "bob")
