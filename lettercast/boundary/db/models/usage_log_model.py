"""
LLM usage log ORM model.

Dependencies: sqlalchemy, lettercast.boundary.db.base
System role: Audit record per upstream call
"""

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lettercast.boundary.db.base import Base, TimestampMixin, UUIDMixin


class LLMUsageLogModel(Base, UUIDMixin, TimestampMixin):
    """
    Usage of one upstream completion call.

    Attributes:
        model: Upstream model identifier
        operation_type: ``chat`` or ``content_generation``
        session_id: Client session identifier
        tokens_prompt: Prompt tokens, 0 when unknown
        tokens_completion: Completion tokens, 0 when unknown
        response_time_ms: Latency until the upstream answered
        success: Whether the call succeeded
        error_message: Upstream error body for failed calls
    """

    __tablename__ = "llm_usage_logs"

    model: Mapped[str] = mapped_column(String(128), nullable=False)
    operation_type: Mapped[str] = mapped_column(String(64), nullable=False)
    session_id: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    tokens_prompt: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    tokens_completion: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    response_time_ms: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    success: Mapped[bool] = mapped_column(Boolean, nullable=False)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
