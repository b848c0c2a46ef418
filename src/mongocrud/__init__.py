"""
mongocrud: generic data-access layer over MongoDB

It provides:
- A connector that opens and verifies a MongoDB connection
- A repository parametrized over a record type with CRUD, list and index operations
- A record codec and base classes with repository-maintained timestamps
- An exception taxonomy for connection, read, write and decoding failures

The package is organized into logical modules:
- mongocrud.database: connector, filter builders, generic repository
- mongocrud.schema: record base classes and codec
- mongocrud.config: configuration management
- mongocrud.utils: error handling
"""

from .database import (
    CRUDRepository,
    IndexSpec,
    MongoRepository,
    Selector,
    connect,
    connect_with_config,
    disconnect,
)
from .schema import BaseDocument, Timestamped, TimestampedDocument
from .utils import (
    DatabaseConnectionError,
    DatabaseError,
    DecodingError,
    NotFoundError,
    ReadError,
    SerializationError,
    WriteError,
)

__version__ = "1.0.0"

__all__ = [
    "BaseDocument",
    "CRUDRepository",
    "DatabaseConnectionError",
    "DatabaseError",
    "DecodingError",
    "IndexSpec",
    "MongoRepository",
    "NotFoundError",
    "ReadError",
    "Selector",
    "SerializationError",
    "Timestamped",
    "TimestampedDocument",
    "WriteError",
    "connect",
    "connect_with_config",
    "disconnect",
]
