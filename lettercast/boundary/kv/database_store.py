"""
SQLAlchemy-backed key-value store.

Dependencies: sqlalchemy, lettercast.boundary.db
System role: Durable key-value back end shared across processes
"""

import logging
from datetime import timedelta
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lettercast.boundary.db.base import utcnow
from lettercast.boundary.db.CRUD.kv_entry_crud import kv_entry_crud
from lettercast.boundary.kv.base import KeyValueStore, ValueFormat, decode_value, serialize_value
from lettercast.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class DatabaseKeyValueStore(KeyValueStore):
    """
    Key-value store over the ``kv_entries`` table.

    Each operation runs in its own short session and commits immediately.
    Database failures surface as StorageError.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """
        Args:
            session_factory: Factory bound to the target engine
        """
        self._session_factory = session_factory

    async def get(self, key: str, format: ValueFormat = "text") -> Any:
        try:
            async with self._session_factory() as session:
                entry = await kv_entry_crud.get_live(session, key)
                raw = entry.value if entry else None
        except SQLAlchemyError as e:
            raise StorageError(f"Key-value read failed: {e}", operation="get", key=key) from e
        return decode_value(key, raw, format)

    async def put(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        expires_at = utcnow() + timedelta(seconds=ttl_seconds) if ttl_seconds is not None else None
        try:
            async with self._session_factory() as session:
                await kv_entry_crud.upsert(session, key, serialize_value(value), expires_at)
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Key-value write failed: {e}", operation="put", key=key) from e

    async def delete(self, key: str) -> bool:
        try:
            async with self._session_factory() as session:
                deleted = await kv_entry_crud.delete_by_id(session, key)
                await session.commit()
                return deleted
        except SQLAlchemyError as e:
            raise StorageError(f"Key-value delete failed: {e}", operation="delete", key=key) from e

    async def list_keys(self, prefix: str = "") -> list[str]:
        try:
            async with self._session_factory() as session:
                return list(await kv_entry_crud.list_live_keys(session, prefix))
        except SQLAlchemyError as e:
            raise StorageError(f"Key-value scan failed: {e}", operation="list") from e

    async def purge_expired(self, prefix: str = "") -> int:
        try:
            async with self._session_factory() as session:
                purged = await kv_entry_crud.delete_expired(session, prefix)
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Key-value purge failed: {e}", operation="purge") from e
        logger.info("Purged expired key-value entries", extra={"prefix": prefix, "purged": purged})
        return purged
