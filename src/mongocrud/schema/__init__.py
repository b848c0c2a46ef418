"""
Schema Package

Record base classes and the record <-> document codec.
"""

from .base import (
    ID_FIELD,
    BaseDocument,
    Timestamped,
    TimestampedDocument,
)
from .codec import decode_document, encode_document, ensure_encodable

__all__ = [
    "ID_FIELD",
    "BaseDocument",
    "Timestamped",
    "TimestampedDocument",
    "decode_document",
    "encode_document",
    "ensure_encodable",
]
