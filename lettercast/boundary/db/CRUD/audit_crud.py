"""
Audit log CRUD operations.

Dependencies: sqlalchemy, lettercast.boundary.db.models
System role: Usage and moderation audit persistence
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lettercast.boundary.db.CRUD.base_crud import BaseCRUD
from lettercast.boundary.db.models.moderation_log_model import ModerationLogModel
from lettercast.boundary.db.models.usage_log_model import LLMUsageLogModel


class UsageLogCRUD(BaseCRUD[LLMUsageLogModel]):
    """CRUD operations for LLMUsageLogModel."""

    def __init__(self) -> None:
        super().__init__(LLMUsageLogModel)

    async def get_by_session(
        self,
        session: AsyncSession,
        session_id: str,
        limit: int | None = None,
    ) -> Sequence[LLMUsageLogModel]:
        """Usage rows for one client session, newest first."""
        stmt = (
            select(LLMUsageLogModel)
            .where(LLMUsageLogModel.session_id == session_id)
            .order_by(LLMUsageLogModel.created_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()


class ModerationLogCRUD(BaseCRUD[ModerationLogModel]):
    """CRUD operations for ModerationLogModel."""

    def __init__(self) -> None:
        super().__init__(ModerationLogModel)


usage_log_crud = UsageLogCRUD()
moderation_log_crud = ModerationLogCRUD()
