"""
MongoDB connection helpers

``connect`` makes a single attempt: build the client, ping the server,
hand back the named database. Failures surface immediately as
DatabaseConnectionError.
"""

import logging
from typing import Any, Optional

from pymongo import MongoClient
from pymongo.database import Database

from ..config.dataclasses import StorageConfig
from ..utils.error_handler import DatabaseConnectionError

logger = logging.getLogger(__name__)


def connect(connection_string: str, database_name: str, **client_options: Any) -> Database:
    """
    Connect to MongoDB and return a handle to ``database_name``

    Args:
        connection_string: MongoDB connection URI
        database_name: Name of the database
        **client_options: Extra keyword arguments for MongoClient

    Returns:
        The pymongo Database handle

    Raises:
        DatabaseConnectionError: If the client cannot be created or the
            server does not answer a ping
    """
    try:
        client = MongoClient(connection_string, **client_options)
    except Exception as e:
        logger.error(f"Failed to create MongoClient: {e}")
        raise DatabaseConnectionError(f"failed to create MongoClient: {e}", operation="connect") from e

    try:
        client.admin.command('ping')
    except Exception as e:
        logger.error(f"Failed to ping MongoDB: {e}")
        client.close()
        raise DatabaseConnectionError(f"failed to ping MongoDB: {e}", operation="ping") from e

    logger.info(f"Connected to MongoDB database '{database_name}'")
    return client[database_name]


def connect_with_config(config: Optional[StorageConfig] = None) -> Database:
    """Connect using a StorageConfig (environment-backed defaults when omitted)"""
    config = config or StorageConfig()
    return connect(config.mongodb_uri, config.database_name, **config.client_options())


def disconnect(database: Database) -> None:
    """Close the client that owns ``database``"""
    database.client.close()
    logger.info("MongoDB connection closed")
