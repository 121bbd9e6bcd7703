"""Key-value storage back ends."""

from lettercast.boundary.kv.base import KeyValueStore
from lettercast.boundary.kv.database_store import DatabaseKeyValueStore
from lettercast.boundary.kv.factory import create_kv_store
from lettercast.boundary.kv.memory_store import InMemoryKeyValueStore

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "DatabaseKeyValueStore",
    "create_kv_store",
]
