"""
Record base classes for documents stored through the generic repository

Records are plain dataclasses. The repository only cares about two things:
how a record turns into a document and back, and whether it carries
creation/update timestamps that the repository should stamp.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime
from enum import Enum
from types import UnionType
from typing import Any, Dict, Optional, Type, TypeVar, Union, get_args, get_origin, get_type_hints

ID_FIELD = "_id"

D = TypeVar("D", bound="BaseDocument")


class Timestamped(ABC):
    """
    Interface for records with creation and update timestamps.

    The repository calls ``stamp_created`` on create and ``stamp_updated`` on
    create and update. Records that do not implement this interface are
    stored as given.
    """

    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @abstractmethod
    def stamp_created(self, now: datetime) -> None:
        ...

    @abstractmethod
    def stamp_updated(self, now: datetime) -> None:
        ...


def to_document_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, BaseDocument):
        return value.to_dict()
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_document_value(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, dict):
        return {k: to_document_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_document_value(v) for v in value]
    return value


def from_document_value(tp: Any, value: Any) -> Any:
    """Rebuild a stored value into the declared field type ``tp``"""
    if value is None:
        return None

    origin = get_origin(tp)
    if origin in (Union, UnionType):
        candidates = [a for a in get_args(tp) if a is not type(None)]
        if len(candidates) == 1:
            return from_document_value(candidates[0], value)
        return value
    if origin in (list, tuple, set) and isinstance(value, list):
        args = get_args(tp)
        if origin is tuple and args and args[-1] is not Ellipsis and len(args) == len(value):
            return tuple(from_document_value(a, v) for a, v in zip(args, value))
        item_type = args[0] if args else Any
        return origin(from_document_value(item_type, v) for v in value)
    if origin is dict and isinstance(value, dict):
        args = get_args(tp)
        value_type = args[1] if len(args) == 2 else Any
        return {k: from_document_value(value_type, v) for k, v in value.items()}

    if tp is Any or not isinstance(tp, type) or isinstance(value, tp):
        return value
    if issubclass(tp, Enum):
        return tp(value)
    if issubclass(tp, BaseDocument) and isinstance(value, dict):
        return tp.from_dict(value)
    if is_dataclass(tp) and isinstance(value, dict):
        return build_dataclass(tp, value)
    return value


def build_dataclass(cls: type, data: Dict[str, Any]) -> Any:
    hints = get_type_hints(cls)
    return cls(**{
        f.name: from_document_value(hints.get(f.name, Any), data[f.name])
        for f in fields(cls)
        if f.init and f.name in data
    })


# Base Document class
@dataclass
class BaseDocument:
    """Base class for all MongoDB documents; ``id`` is stored as ``_id``"""
    id: Any

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for MongoDB storage"""
        doc: Dict[str, Any] = {ID_FIELD: self.id}
        for f in fields(self):
            if f.name == "id":
                continue
            doc[f.name] = to_document_value(getattr(self, f.name))
        return doc

    @classmethod
    def from_dict(cls: Type[D], data: Dict[str, Any]) -> D:
        """Build a record from a stored document, ignoring unknown keys"""
        hints = get_type_hints(cls)
        known = {f.name for f in fields(cls) if f.init}
        kwargs = {
            k: from_document_value(hints.get(k, Any), v)
            for k, v in data.items()
            if k in known and k != "id"
        }
        if ID_FIELD in data:
            kwargs["id"] = data[ID_FIELD]
        elif "id" in data:
            kwargs["id"] = data["id"]
        return cls(**kwargs)


@dataclass
class TimestampedDocument(BaseDocument, Timestamped):
    """Document whose timestamps are maintained by the repository"""
    created_at: Optional[datetime] = field(default=None, kw_only=True)
    updated_at: Optional[datetime] = field(default=None, kw_only=True)

    def stamp_created(self, now: datetime) -> None:
        self.created_at = now

    def stamp_updated(self, now: datetime) -> None:
        self.updated_at = now
