"""
Error Handler Module for the MongoDB data-access layer

This module defines the exception taxonomy raised by the connector and the
generic repository, plus a context manager that turns driver failures into
those exceptions with the name of the failing operation attached.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Type

# Configure logger
logger = logging.getLogger(__name__)


class DatabaseError(Exception):
    """Base exception for every data-access failure"""

    default_error_code = "DB_ERROR"

    def __init__(self, message: str, operation: Optional[str] = None, error_code: Optional[str] = None):
        self.message = message
        self.operation = operation
        self.error_code = error_code or self.default_error_code
        self.timestamp = datetime.now(timezone.utc)
        super().__init__(self.message)


class DatabaseConnectionError(DatabaseError):
    """Client could not be constructed or the server did not answer a ping"""

    default_error_code = "DB_CONNECTION_ERROR"


class NotFoundError(DatabaseError):
    """Zero documents matched where exactly one was expected"""

    default_error_code = "DB_NOT_FOUND"


class ReadError(DatabaseError):
    """Query failure other than not-found"""

    default_error_code = "DB_READ_ERROR"


class WriteError(DatabaseError):
    """Insert, update, delete or index creation failure"""

    default_error_code = "DB_WRITE_ERROR"


class SerializationError(DatabaseError):
    """Record could not be converted into a field map"""

    default_error_code = "DB_SERIALIZATION_ERROR"


class DecodingError(DatabaseError):
    """Stored document could not be decoded into the record type"""

    default_error_code = "DB_DECODING_ERROR"


# Context manager for database operations
class DatabaseOperation:
    """
    Context manager for a single driver call.

    Exceptions from the taxonomy above pass through unchanged. Anything else
    raised inside the block is wrapped in ``error_class`` with the operation
    name in the message and the original exception chained as the cause.
    """

    def __init__(self, operation_name: str, error_class: Type[DatabaseError] = DatabaseError):
        self.operation_name = operation_name
        self.error_class = error_class
        self.logger = logging.getLogger(__name__)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            return False

        if issubclass(exc_type, DatabaseError):
            # Re-raise our custom exceptions
            return False

        if not issubclass(exc_type, Exception):
            return False

        message = f"Database operation '{self.operation_name}' failed: {exc_val}"
        self.logger.error(message)
        raise self.error_class(message, operation=self.operation_name) from exc_val


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
