#!/usr/bin/env python3
"""
MongoDB Smoke Test Script

Connects with the environment configuration and runs every repository
operation once against a throwaway collection, which is dropped at the end.
"""

import logging
import sys
import uuid
from dataclasses import dataclass

from mongocrud.config import Config, configure_logging
from mongocrud.config.dataclasses import StorageConfig
from mongocrud.database import IndexSpec, MongoRepository, Selector, connect_with_config, disconnect
from mongocrud.schema import TimestampedDocument
from mongocrud.utils import DatabaseError

configure_logging()
logger = logging.getLogger(__name__)


@dataclass
class SmokeRecord(TimestampedDocument):
    name: str = ""
    group: str = ""


def run_smoke_test() -> bool:
    """Run the full operation sequence; returns True when everything passed"""
    Config.log_configuration()
    db = connect_with_config(StorageConfig())
    collection = db[f"smoke_{uuid.uuid4().hex[:8]}"]
    repo = MongoRepository(collection, SmokeRecord)

    try:
        logger.info(f"Test 1: create index on {collection.name}")
        index_name = repo.create_index(IndexSpec().ascending("group").ascending("name"), unique=True)
        logger.info(f"   index: {index_name}")

        logger.info("Test 2: create and get")
        repo.create(SmokeRecord("r1", name="first", group="a"))
        repo.create(SmokeRecord("r2", name="second", group="a"))
        record = repo.get("r1")
        logger.info(f"   got {record.id} created_at={record.created_at}")

        logger.info("Test 3: update and update_attributes")
        repo.update("r1", SmokeRecord("r1", name="first-renamed", group="a", created_at=record.created_at))
        repo.update_attributes(Selector().eq("group", "a"), {"group": "b"})

        logger.info("Test 4: find, exists, list")
        found = repo.find({"name": "first-renamed"})
        _, missing = repo.exists({"group": "a"})
        listed = repo.list({"group": "b"})
        logger.info(f"   find={found.id} exists(group=a)={missing} list(group=b)={len(listed)}")

        logger.info("Test 5: delete and delete_range")
        repo.delete("r1")
        repo.delete_range({"group": "b"})
        remaining = repo.list_all()
        logger.info(f"   remaining documents: {len(remaining)}")

        return not missing and len(listed) == 2 and remaining == []
    finally:
        collection.drop()
        disconnect(db)


if __name__ == "__main__":
    try:
        ok = run_smoke_test()
    except DatabaseError as e:
        logger.error(f"Smoke test failed during '{e.operation}': {e.message}")
        sys.exit(1)

    if ok:
        logger.info("Smoke test passed")
    else:
        logger.error("Smoke test finished with unexpected results")
    sys.exit(0 if ok else 1)
