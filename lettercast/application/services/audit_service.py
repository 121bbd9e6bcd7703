"""
Audit service for usage and moderation records.

Every write is scheduled in the background and never blocks or fails
the request that produced it. With auditing disabled, records are
only logged.

Dependencies: sqlalchemy, lettercast.boundary.db.CRUD
System role: Fire-and-forget analytics writes
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lettercast.application.background import BackgroundTasks
from lettercast.boundary.db.CRUD.audit_crud import moderation_log_crud, usage_log_crud
from lettercast.models.moderation import ModerationVerdict

logger = logging.getLogger(__name__)


class AuditService:
    """Writes usage and moderation audit rows."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        enabled: bool = False,
    ) -> None:
        """
        Args:
            session_factory: Factory for the audit database
            enabled: Persist records; requires a session factory
        """
        self.session_factory = session_factory
        self.enabled = enabled and session_factory is not None
        self.tasks = BackgroundTasks("audit")

    def record_usage(
        self,
        *,
        model: str,
        operation_type: str,
        session_id: str | None,
        response_time_ms: int,
        success: bool,
        tokens_prompt: int = 0,
        tokens_completion: int = 0,
        error_message: str | None = None,
    ) -> None:
        """Record one upstream call."""
        logger.info(
            "LLM usage",
            extra={
                "model": model,
                "operation_type": operation_type,
                "session_id": session_id,
                "tokens_prompt": tokens_prompt,
                "tokens_completion": tokens_completion,
                "response_time_ms": response_time_ms,
                "success": success,
            },
        )
        if not self.enabled:
            return
        self.tasks.spawn(self._write_usage(
            model=model,
            operation_type=operation_type,
            session_id=session_id,
            tokens_prompt=tokens_prompt,
            tokens_completion=tokens_completion,
            response_time_ms=response_time_ms,
            success=success,
            error_message=error_message,
        ))

    def record_moderation(self, verdict: ModerationVerdict, session_id: str | None) -> None:
        """Record one moderation verdict."""
        if not self.enabled:
            return
        self.tasks.spawn(self._write_moderation(
            content_type=verdict.content_type.value,
            moderation_result="approved" if verdict.approved else "flagged",
            moderation_reason=verdict.reason,
            original_content=verdict.original_content,
            moderated_content=verdict.moderated_content,
            session_id=session_id,
        ))

    async def _write_usage(self, **fields) -> None:
        try:
            async with self.session_factory() as session:
                await usage_log_crud.create(session, **fields)
                await session.commit()
        except Exception as e:
            logger.error(
                "Failed to log LLM usage",
                extra={"error_type": type(e).__name__, "error_msg": str(e)},
            )

    async def _write_moderation(self, **fields) -> None:
        try:
            async with self.session_factory() as session:
                await moderation_log_crud.create(session, **fields)
                await session.commit()
        except Exception as e:
            logger.error(
                "Failed to log moderation result",
                extra={"error_type": type(e).__name__, "error_msg": str(e)},
            )

    async def drain(self) -> None:
        """Wait for pending audit writes."""
        await self.tasks.drain()
