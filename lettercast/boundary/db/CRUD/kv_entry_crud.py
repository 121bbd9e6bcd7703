"""
Key-value entry CRUD operations.

Extends BaseCRUD with expiry-aware reads, upserts and prefix scans.

Dependencies: sqlalchemy, lettercast.boundary.db.models.kv_entry_model
System role: Durable key-value persistence operations
"""

from datetime import datetime
from typing import Sequence

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from lettercast.boundary.db.base import utcnow
from lettercast.boundary.db.CRUD.base_crud import BaseCRUD
from lettercast.boundary.db.models.kv_entry_model import KVEntryModel


def _live(now: datetime):
    return or_(KVEntryModel.expires_at.is_(None), KVEntryModel.expires_at > now)


def _escape_like(prefix: str) -> str:
    return prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class KVEntryCRUD(BaseCRUD[KVEntryModel]):
    """CRUD operations for KVEntryModel."""

    def __init__(self) -> None:
        """Initialize KVEntryCRUD with KVEntryModel."""
        super().__init__(KVEntryModel)

    async def get_live(self, session: AsyncSession, key: str) -> KVEntryModel | None:
        """
        Retrieve an entry that has not expired.

        Args:
            session: Async database session
            key: Entry key

        Returns:
            KVEntryModel if present and live, None otherwise
        """
        stmt = select(KVEntryModel).where(KVEntryModel.key == key, _live(utcnow()))
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(
        self,
        session: AsyncSession,
        key: str,
        value: str,
        expires_at: datetime | None,
    ) -> KVEntryModel:
        """
        Insert or replace an entry; the last write wins.

        Args:
            session: Async database session
            key: Entry key
            value: Serialized value
            expires_at: Expiry instant, None to keep forever

        Returns:
            The stored entry
        """
        entry = await session.get(KVEntryModel, key)
        if entry is None:
            return await self.create(session, key=key, value=value, expires_at=expires_at)
        entry.value = value
        entry.expires_at = expires_at
        await session.flush()
        return entry

    async def list_live_keys(self, session: AsyncSession, prefix: str = "") -> Sequence[str]:
        """
        List live keys starting with a prefix.

        Args:
            session: Async database session
            prefix: Key prefix ('' for all)

        Returns:
            Matching keys in lexical order
        """
        stmt = (
            select(KVEntryModel.key)
            .where(KVEntryModel.key.like(f"{_escape_like(prefix)}%", escape="\\"), _live(utcnow()))
            .order_by(KVEntryModel.key)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_expired(self, session: AsyncSession, prefix: str = "") -> int:
        """
        Delete expired entries under a prefix.

        Args:
            session: Async database session
            prefix: Key prefix ('' for all)

        Returns:
            Number of deleted rows
        """
        stmt = delete(KVEntryModel).where(
            KVEntryModel.key.like(f"{_escape_like(prefix)}%", escape="\\"),
            KVEntryModel.expires_at.is_not(None),
            KVEntryModel.expires_at <= utcnow(),
        )
        result = await session.execute(stmt)
        return result.rowcount or 0


kv_entry_crud = KVEntryCRUD()
