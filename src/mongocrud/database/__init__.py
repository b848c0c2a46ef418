"""
Database Package

Connection helpers and the generic MongoDB repository.
"""

from .abstract import CRUDRepository
from .connection import connect, connect_with_config, disconnect
from .filters import IndexSpec, Selector, build_filter, build_index_keys
from .mongo import MongoRepository

__all__ = [
    "CRUDRepository",
    "MongoRepository",
    "IndexSpec",
    "Selector",
    "build_filter",
    "build_index_keys",
    "connect",
    "connect_with_config",
    "disconnect",
]
