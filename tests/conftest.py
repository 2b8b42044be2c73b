import pytest
from fastapi.testclient import TestClient

from config import Config
from main import create_app
from services.memory_store import InMemoryStore
from services.token_service import TokenService

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture
def config(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
    monkeypatch.setenv("STORE_BACKEND", "memory")
    monkeypatch.setenv("ENVIRONMENT", "test")
    return Config()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def token_service():
    return TokenService(TEST_SECRET)


@pytest.fixture
def app(config, store, token_service):
    return create_app(config=config, store=store, token_service=token_service)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Register a user and return the response body"""

    def _register(username="alice", password="correct horse"):
        response = client.post("/api/auth/register", json={"username": username, "password": password})
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def auth_headers(register):
    def _headers(username="alice", password="correct horse"):
        body = register(username, password)
        return {"Authorization": f"Bearer {body['token']}"}

    return _headers
