"""
Pytest configuration and shared fixtures.

This module provides:
- Environment variable setup for tests
- An in-memory stand-in for the pymongo Collection methods the repository calls
- Repository fixtures over the sample records in records.py
"""

import copy
import os
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from pymongo.errors import DuplicateKeyError

# Set test environment variables BEFORE any imports of the package
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("DATABASE_NAME", "mongocrud_test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from mongocrud.database.mongo import MongoRepository  # noqa: E402
from records import Article  # noqa: E402


def _lookup(doc: Dict[str, Any], path: str) -> Any:
    value: Any = doc
    for part in path.split("."):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


_MISSING = object()


class InMemoryCollection:
    """
    Collection double with equality filters, $set updates and unique indexes.

    Documents are deep-copied in and out so callers never share state with
    the stored copy, like a real server.
    """

    def __init__(self, name: str = "records"):
        self.name = name
        self.docs: List[Dict[str, Any]] = []
        self.indexes: Dict[str, Dict[str, Any]] = {}
        self.calls: List[tuple] = []

    def _matches(self, doc: Dict[str, Any], query: Dict[str, Any]) -> bool:
        return all(_lookup(doc, k) == v for k, v in query.items())

    def _check_unique(self, candidate: Dict[str, Any], ignore: Optional[Dict[str, Any]] = None) -> None:
        if any(d is not ignore and d["_id"] == candidate["_id"] for d in self.docs):
            raise DuplicateKeyError("E11000 duplicate key error index: _id_", 11000)
        for name, index in self.indexes.items():
            if not index["unique"]:
                continue
            key = tuple(_lookup(candidate, f) for f, _ in index["keys"])
            for d in self.docs:
                if d is ignore:
                    continue
                if tuple(_lookup(d, f) for f, _ in index["keys"]) == key:
                    raise DuplicateKeyError(f"E11000 duplicate key error index: {name}", 11000)

    def insert_one(self, doc, session=None):
        self.calls.append(("insert_one", doc, session))
        stored = copy.deepcopy(doc)
        self._check_unique(stored)
        self.docs.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"], acknowledged=True)

    def find_one(self, query, session=None):
        self.calls.append(("find_one", query, session))
        for doc in self.docs:
            if self._matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def find(self, query, session=None):
        self.calls.append(("find", query, session))
        return iter([copy.deepcopy(d) for d in self.docs if self._matches(d, query)])

    def _apply_set(self, doc, update):
        updated = copy.deepcopy(doc)
        updated.update(copy.deepcopy(update["$set"]))
        self._check_unique(updated, ignore=doc)
        doc.clear()
        doc.update(updated)

    def update_one(self, query, update, session=None):
        self.calls.append(("update_one", query, update, session))
        for doc in self.docs:
            if self._matches(doc, query):
                self._apply_set(doc, update)
                return SimpleNamespace(matched_count=1, modified_count=1, acknowledged=True)
        return SimpleNamespace(matched_count=0, modified_count=0, acknowledged=True)

    def update_many(self, query, update, session=None):
        self.calls.append(("update_many", query, update, session))
        matched = [d for d in self.docs if self._matches(d, query)]
        for doc in matched:
            self._apply_set(doc, update)
        return SimpleNamespace(matched_count=len(matched), modified_count=len(matched), acknowledged=True)

    def delete_one(self, query, session=None):
        self.calls.append(("delete_one", query, session))
        for i, doc in enumerate(self.docs):
            if self._matches(doc, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1, acknowledged=True)
        return SimpleNamespace(deleted_count=0, acknowledged=True)

    def delete_many(self, query, session=None):
        self.calls.append(("delete_many", query, session))
        kept = [d for d in self.docs if not self._matches(d, query)]
        deleted = len(self.docs) - len(kept)
        self.docs = kept
        return SimpleNamespace(deleted_count=deleted, acknowledged=True)

    def create_index(self, keys, unique=False, session=None):
        self.calls.append(("create_index", keys, unique, session))
        name = "_".join(f"{f}_{d}" for f, d in keys)
        self.indexes[name] = {"keys": list(keys), "unique": unique}
        return name


@pytest.fixture
def collection():
    """Empty in-memory collection"""
    return InMemoryCollection("articles")


@pytest.fixture
def repo(collection):
    """Article repository bound to the in-memory collection"""
    return MongoRepository(collection, Article)
