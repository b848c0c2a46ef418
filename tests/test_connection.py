"""Unit tests for the connection helpers; MongoClient is mocked."""

from unittest.mock import MagicMock, patch

import pytest
from pymongo.errors import ConfigurationError, ServerSelectionTimeoutError

from mongocrud.config.dataclasses import StorageConfig
from mongocrud.database.connection import connect, connect_with_config, disconnect
from mongocrud.utils.error_handler import DatabaseConnectionError


@pytest.fixture
def mongo_client():
    with patch("mongocrud.database.connection.MongoClient") as client_cls:
        yield client_cls


class TestConnect:
    """Test suite for connect."""

    def test_returns_named_database_after_ping(self, mongo_client):
        client = mongo_client.return_value

        db = connect("mongodb://db:27017", "app", serverSelectionTimeoutMS=100)

        mongo_client.assert_called_once_with("mongodb://db:27017", serverSelectionTimeoutMS=100)
        client.admin.command.assert_called_once_with("ping")
        client.__getitem__.assert_called_once_with("app")
        assert db is client.__getitem__.return_value

    def test_construction_failure(self, mongo_client):
        mongo_client.side_effect = ConfigurationError("invalid URI scheme")

        with pytest.raises(DatabaseConnectionError) as exc_info:
            connect("bogus://", "app")

        assert exc_info.value.message.startswith("failed to create MongoClient")
        assert exc_info.value.operation == "connect"

    def test_ping_failure_closes_client(self, mongo_client):
        client = mongo_client.return_value
        client.admin.command.side_effect = ServerSelectionTimeoutError("no servers")

        with pytest.raises(DatabaseConnectionError) as exc_info:
            connect("mongodb://db:27017", "app")

        assert exc_info.value.message.startswith("failed to ping MongoDB")
        assert exc_info.value.operation == "ping"
        client.close.assert_called_once()


class TestConfigHelpers:
    """Test suite for connect_with_config and disconnect."""

    def test_connect_with_config_passes_client_options(self, mongo_client):
        config = StorageConfig(
            mongodb_uri="mongodb://cfg:27017",
            database_name="cfg_db",
            server_selection_timeout_ms=250,
            app_name="tests",
            tz_aware=False,
            extra_options={"maxPoolSize": 5},
        )

        connect_with_config(config)

        mongo_client.assert_called_once_with(
            "mongodb://cfg:27017",
            serverSelectionTimeoutMS=250,
            tz_aware=False,
            appname="tests",
            maxPoolSize=5,
        )
        mongo_client.return_value.__getitem__.assert_called_once_with("cfg_db")

    def test_disconnect_closes_owning_client(self):
        database = MagicMock()

        disconnect(database)

        database.client.close.assert_called_once()
