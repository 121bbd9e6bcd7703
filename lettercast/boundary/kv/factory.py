"""
Key-value store factory.

Selects the back end from STORAGE_KV_BACKEND.

Dependencies: lettercast.boundary.kv, lettercast.configs
System role: Key-value store instantiation and selection
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lettercast.boundary.kv.base import KeyValueStore
from lettercast.boundary.kv.database_store import DatabaseKeyValueStore
from lettercast.boundary.kv.memory_store import InMemoryKeyValueStore
from lettercast.configs.storage import StorageSettings

logger = logging.getLogger(__name__)


def create_kv_store(
    settings: StorageSettings,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> KeyValueStore:
    """
    Build the configured key-value store.

    Args:
        settings: Storage settings
        session_factory: Required for the database back end

    Returns:
        KeyValueStore: Configured store instance

    Raises:
        ValueError: If the database back end is selected without a session factory
    """
    if settings.kv_backend == "database":
        if session_factory is None:
            raise ValueError("The database key-value back end requires a session factory")
        logger.info("Creating database key-value store")
        return DatabaseKeyValueStore(session_factory)

    logger.info("Creating in-memory key-value store")
    return InMemoryKeyValueStore()
