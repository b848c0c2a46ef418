"""
Utilities Package for the MongoDB data-access layer

This package provides the error taxonomy and error handling helpers.
"""

from .error_handler import (
    DatabaseError,
    DatabaseConnectionError,
    NotFoundError,
    ReadError,
    WriteError,
    SerializationError,
    DecodingError,
    DatabaseOperation,
)

__all__ = [
    "DatabaseError",
    "DatabaseConnectionError",
    "NotFoundError",
    "ReadError",
    "WriteError",
    "SerializationError",
    "DecodingError",
    "DatabaseOperation",
]
