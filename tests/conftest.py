"""Pytest configuration and fixtures."""

import copy
from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from users_api.config import Settings
from users_api.main import create_app
from users_common.services.user_store import InMemoryUserStore

VALID_PAYLOAD = {
    "name": "Ann Smith",
    "email": "ann@example.com",
    "phone": "555-0100",
    "company": "Acme",
    "address": {
        "street": "1 Main St",
        "city": "Springfield",
        "zip": "12345",
        "geo": {"lat": "40.7128", "lng": "-74.0060"},
    },
}


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None, storage_backend="memory", environment="test", ui_url="http://localhost:3000")


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def client(settings: Settings, user_store: InMemoryUserStore) -> Iterator[TestClient]:
    """Create a FastAPI test client backed by an in-memory store."""
    app = create_app(settings, user_store=user_store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def valid_payload() -> dict:
    """A fresh copy of a fully valid user payload."""
    return copy.deepcopy(VALID_PAYLOAD)
