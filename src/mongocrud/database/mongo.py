"""
Generic MongoDB repository

``MongoRepository`` binds one pymongo collection to one record type and
implements CRUDRepository on top of it. Each operation builds a filter,
issues exactly one driver call and decodes the result.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar

from pymongo.collection import Collection

from .abstract import CRUDRepository
from .filters import IndexSpecLike, SelectorLike, build_filter, build_index_keys
from ..schema.base import ID_FIELD, Timestamped
from ..schema.codec import decode_document, encode_document, ensure_encodable
from ..utils.error_handler import (
    DatabaseOperation,
    NotFoundError,
    ReadError,
    WriteError,
)

T = TypeVar("T")

CREATED_AT_FIELD = "created_at"
UPDATED_AT_FIELD = "updated_at"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _acknowledged(result) -> bool:
    # counts on an unacknowledged (w=0) result raise InvalidOperation
    return getattr(result, "acknowledged", True)


class MongoRepository(CRUDRepository[T]):
    """MongoDB implementation of the generic record repository"""

    def __init__(self, collection: Collection, document_type: Type[T]):
        """
        Args:
            collection: pymongo collection the repository works on; owned by the caller
            document_type: Record type documents are decoded into
        """
        self.collection = collection
        self.document_type = document_type
        self.logger = logging.getLogger(__name__)

    @property
    def name(self) -> str:
        return getattr(self.collection, "name", "collection")

    def create(self, item: T, *, session=None) -> None:
        """Stamp timestamps and insert ``item`` as a new document"""
        if isinstance(item, Timestamped):
            now = _utcnow()
            item.stamp_created(now)
            item.stamp_updated(now)

        doc = encode_document(item)

        self.logger.debug(f"DB DEBUG: started {self.name}.insert_one")
        with DatabaseOperation("create", WriteError):
            self.collection.insert_one(doc, session=session)
        self.logger.debug(f"DB DEBUG: finished {self.name}.insert_one")

    def get(self, item_id: Any, *, session=None) -> T:
        """Get the record whose ``_id`` equals ``item_id``"""
        return self._find_one("get", {ID_FIELD: item_id}, session)

    def find(self, selector: SelectorLike, *, session=None) -> T:
        """
        Find one record matching every field of ``selector``

        An empty selector matches the first document in the collection.
        """
        return self._find_one("find", selector, session)

    def exists(self, selector: SelectorLike, *, session=None) -> Tuple[Optional[T], bool]:
        try:
            return self.find(selector, session=session), True
        except NotFoundError:
            return None, False

    def update(self, item_id: Any, item: T, *, session=None) -> None:
        """
        Set every field of ``item`` on the document identified by ``item_id``

        A missing ``item_id`` is not an error; nothing is written. A
        timestamped record whose ``created_at`` is unset leaves the stored
        creation time in place.
        """
        if isinstance(item, Timestamped):
            item.stamp_updated(_utcnow())

        fields = encode_document(item)
        fields.pop(ID_FIELD, None)
        if isinstance(item, Timestamped) and fields.get(CREATED_AT_FIELD) is None:
            fields.pop(CREATED_AT_FIELD, None)
        if not fields:
            self.logger.debug(f"Nothing to update for {item_id!r} in {self.name}")
            return

        self.logger.debug(f"DB DEBUG: started {self.name}.update_one")
        with DatabaseOperation("update", WriteError):
            result = self.collection.update_one({ID_FIELD: item_id}, {"$set": fields}, session=session)
        if _acknowledged(result) and result.matched_count == 0:
            self.logger.debug(f"Update matched no document with id {item_id!r} in {self.name}")
        self.logger.debug(f"DB DEBUG: finished {self.name}.update_one")

    def update_attributes(self, selector: SelectorLike, attrs: Mapping[str, Any], *, session=None) -> None:
        """Set ``attrs`` (plus a fresh ``updated_at``) on every matching document"""
        update: Dict[str, Any] = dict(attrs)
        update[UPDATED_AT_FIELD] = _utcnow()
        ensure_encodable(update)

        self.logger.debug(f"DB DEBUG: started {self.name}.update_many")
        with DatabaseOperation("update_attributes", WriteError):
            query = build_filter(selector)
            result = self.collection.update_many(query, {"$set": update}, session=session)
        if _acknowledged(result):
            self.logger.debug(
                f"DB DEBUG: finished {self.name}.update_many (matched={result.matched_count})"
            )

    def delete(self, item_id: Any, *, session=None) -> None:
        with DatabaseOperation("delete", WriteError):
            self.collection.delete_one({ID_FIELD: item_id}, session=session)

    def delete_range(self, selector: SelectorLike, *, session=None) -> None:
        with DatabaseOperation("delete_range", WriteError):
            query = build_filter(selector)
            result = self.collection.delete_many(query, session=session)
        if _acknowledged(result):
            self.logger.debug(f"Deleted {result.deleted_count} document(s) from {self.name}")

    def list_all(self, *, session=None) -> List[T]:
        return self._find_many("list_all", {}, session)

    def list(self, selector: SelectorLike, *, session=None) -> List[T]:
        return self._find_many("list", selector, session)

    def create_index(self, keys: IndexSpecLike, unique: bool = False, *, session=None) -> str:
        """
        Create an index on ``keys`` and return the generated index name

        Key order is the order of the IndexSpec or mapping; for compound
        indexes this is the column order.
        """
        with DatabaseOperation("create_index", WriteError):
            index_keys = build_index_keys(keys)
            if not index_keys:
                raise ValueError("index specification has no fields")
            index_name = self.collection.create_index(index_keys, unique=unique, session=session)

        self.logger.info(f"Created index {index_name} on {self.name} (unique={unique})")
        return index_name

    def _find_one(self, operation: str, selector: SelectorLike, session) -> T:
        self.logger.debug(f"DB DEBUG: started {self.name}.find_one")
        with DatabaseOperation(operation, ReadError):
            query = build_filter(selector)
            doc = self.collection.find_one(query, session=session)
        self.logger.debug(f"DB DEBUG: finished {self.name}.find_one")

        if doc is None:
            raise NotFoundError(f"No document in {self.name} matches {query!r}", operation=operation)
        return decode_document(doc, self.document_type)

    def _find_many(self, operation: str, selector: SelectorLike, session) -> List[T]:
        self.logger.debug(f"DB DEBUG: started {self.name}.find")
        results: List[T] = []
        with DatabaseOperation(operation, ReadError):
            query = build_filter(selector)
            for doc in self.collection.find(query, session=session):
                results.append(decode_document(doc, self.document_type))
        self.logger.debug(f"DB DEBUG: finished {self.name}.find ({len(results)} documents)")
        return results
