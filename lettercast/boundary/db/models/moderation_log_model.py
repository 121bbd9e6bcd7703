"""
Content moderation log ORM model.

Dependencies: sqlalchemy, lettercast.boundary.db.base
System role: Audit record per flagged moderation verdict
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lettercast.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ModerationLogModel(Base, UUIDMixin, TimestampMixin):
    """
    Summary of one moderation verdict.

    Attributes:
        content_type: Moderated content kind
        moderation_result: ``approved`` or ``flagged``
        moderation_reason: Joined list of violated rules
        original_content: Text before moderation
        moderated_content: Text after moderation ('' when rejected)
        session_id: Client session identifier
    """

    __tablename__ = "content_moderation_logs"

    content_type: Mapped[str] = mapped_column(String(64), nullable=False)
    moderation_result: Mapped[str] = mapped_column(String(32), nullable=False)
    moderation_reason: Mapped[str] = mapped_column(Text, nullable=False)
    original_content: Mapped[str] = mapped_column(Text, default="", nullable=False)
    moderated_content: Mapped[str] = mapped_column(Text, default="", nullable=False)
    session_id: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
