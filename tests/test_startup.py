"""Tests for configuration, middleware helpers and storage startup."""

import asyncio
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from users_api.config import Settings
from users_api.main import create_app
from users_api.middleware import get_allowed_origins, get_cors_headers
from users_api.services import create_user_store
from users_api.services.cosmos_db_init import CosmosDbInitializer
from users_common.infra.cosmos.cosmos_base import create_cosmos_client
from users_common.services.user_store import CosmosUserStore, InMemoryUserStore


@pytest.mark.unit
def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("API_PORT", "5050")
    monkeypatch.setenv("UI_URL", "https://users.example.com")
    monkeypatch.setenv("STORAGE_BACKEND", "memory")

    settings = Settings(_env_file=None)

    assert settings.api_port == 5050
    assert settings.ui_url == "https://users.example.com"
    assert settings.storage_backend == "memory"


@pytest.mark.unit
def test_settings_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.api_port == 4000
    assert settings.ui_url == "http://localhost:3000"
    assert settings.users_container == "users"


@pytest.mark.unit
def test_allowed_origins_is_the_single_ui_origin() -> None:
    assert get_allowed_origins("http://localhost:3000/") == ["http://localhost:3000"]
    assert get_allowed_origins(None) == []


@pytest.mark.unit
def test_cors_headers_only_for_allowed_origin() -> None:
    assert get_cors_headers("http://localhost:3000", "http://localhost:3000")["Access-Control-Allow-Origin"] == (
        "http://localhost:3000"
    )
    assert get_cors_headers("http://other:3000", "http://localhost:3000") == {}
    assert get_cors_headers(None, "http://localhost:3000") == {}


@pytest.mark.unit
def test_create_cosmos_client_requires_a_target() -> None:
    with pytest.raises(ValueError):
        create_cosmos_client()


@pytest.mark.unit
def test_create_cosmos_client_prefers_connection_string() -> None:
    with patch("users_common.infra.cosmos.cosmos_base.CosmosClient") as client_cls:
        create_cosmos_client(connection_string="AccountEndpoint=https://x/;AccountKey=k;", endpoint="https://y/")

    client_cls.from_connection_string.assert_called_once_with("AccountEndpoint=https://x/;AccountKey=k;")
    client_cls.assert_not_called()


@pytest.mark.unit
def test_initializer_creates_database_and_container() -> None:
    settings = Settings(_env_file=None, azure_cosmosdb_endpoint="https://localhost:8081/", azure_cosmosdb_key="k")
    client = MagicMock()

    with patch("users_api.services.cosmos_db_init.create_cosmos_client", return_value=client):
        container = CosmosDbInitializer(settings).initialize()

    client.create_database_if_not_exists.assert_called_once_with(id="user_management")
    database = client.create_database_if_not_exists.return_value
    kwargs = database.create_container_if_not_exists.call_args.kwargs
    assert kwargs["id"] == "users"
    assert kwargs["offer_throughput"] == 400
    assert container is database.create_container_if_not_exists.return_value


@pytest.mark.unit
def test_create_user_store_selects_backend() -> None:
    memory = asyncio.run(create_user_store(Settings(_env_file=None, storage_backend="memory")))
    assert isinstance(memory, InMemoryUserStore)

    settings = Settings(_env_file=None, azure_cosmosdb_endpoint="https://db.example.com/", azure_cosmosdb_key="k")
    container = MagicMock()
    container.id = "users"
    with patch("users_api.services.initialize_cosmos_db", return_value=container) as init:
        cosmos = asyncio.run(create_user_store(settings))

    init.assert_called_once_with(settings)
    assert isinstance(cosmos, CosmosUserStore)


@pytest.mark.unit
def test_storage_failure_aborts_startup() -> None:
    settings = Settings(_env_file=None, azure_cosmosdb_endpoint="https://db.example.com/", azure_cosmosdb_key="k")
    client = MagicMock()
    client.create_database_if_not_exists.side_effect = ConnectionError("unreachable")

    with patch("users_api.services.cosmos_db_init.create_cosmos_client", return_value=client):
        with pytest.raises(ConnectionError):
            with TestClient(create_app(settings)):
                pass
