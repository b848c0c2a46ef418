"""
Record <-> document conversion

The repository never defines its own wire format. Records become plain
field-keyed dicts here and pymongo's BSON layer does the rest.
"""

import dataclasses
import logging
from typing import Any, Dict, Mapping, Type, TypeVar

import bson
from bson.errors import BSONError
from pydantic import BaseModel

from ..utils.error_handler import DecodingError, SerializationError
from .base import ID_FIELD, build_dataclass, to_document_value

logger = logging.getLogger(__name__)

T = TypeVar("T")


def encode_document(item: Any) -> Dict[str, Any]:
    """
    Convert a record into a field map ready for the driver.

    Supported records: objects with ``to_dict()``, pydantic models,
    dataclasses and mappings. The result is checked for BSON-encodability so
    failures surface as ``SerializationError`` rather than deep inside the
    driver.

    Raises:
        SerializationError: If the record cannot be converted
    """
    try:
        if isinstance(item, BaseModel):
            doc = to_document_value(item.model_dump(by_alias=True))
        elif hasattr(item, "to_dict") and callable(item.to_dict):
            doc = item.to_dict()
        elif dataclasses.is_dataclass(item) and not isinstance(item, type):
            doc = to_document_value(item)
            if "id" in doc and ID_FIELD not in doc:
                doc[ID_FIELD] = doc.pop("id")
        elif isinstance(item, Mapping):
            doc = dict(item)
        else:
            raise TypeError(f"unsupported record type {type(item).__name__}")

        if not isinstance(doc, dict):
            raise TypeError(f"{type(item).__name__} did not produce a field map")

        ensure_encodable(doc)
        return doc
    except SerializationError:
        raise
    except Exception as e:
        raise SerializationError(
            f"Failed to serialize {type(item).__name__}: {e}",
            operation="encode"
        ) from e


def ensure_encodable(doc: Mapping[str, Any]) -> None:
    """Raise SerializationError when ``doc`` cannot be represented as BSON"""
    try:
        bson.encode(doc)
    except (BSONError, TypeError, OverflowError) as e:
        raise SerializationError(f"Document is not BSON-encodable: {e}", operation="encode") from e


def decode_document(doc: Mapping[str, Any], document_type: Type[T]) -> T:
    """
    Build a ``document_type`` record from a stored document.

    Raises:
        DecodingError: If the document does not fit the record type
    """
    try:
        if isinstance(document_type, type) and issubclass(document_type, BaseModel):
            return document_type.model_validate(dict(doc))
        from_dict = getattr(document_type, "from_dict", None)
        if callable(from_dict):
            return from_dict(dict(doc))
        if dataclasses.is_dataclass(document_type):
            data = dict(doc)
            if ID_FIELD in data:
                data["id"] = data.pop(ID_FIELD)
            return build_dataclass(document_type, data)
        if isinstance(document_type, type) and issubclass(document_type, Mapping):
            return document_type(doc)
        raise TypeError(f"don't know how to decode into {getattr(document_type, '__name__', document_type)!r}")
    except DecodingError:
        raise
    except Exception as e:
        logger.debug(f"Could not decode document {doc.get(ID_FIELD)!r}: {e}")
        raise DecodingError(
            f"Failed to decode document {doc.get(ID_FIELD)!r} into "
            f"{getattr(document_type, '__name__', document_type)}: {e}",
            operation="decode"
        ) from e
