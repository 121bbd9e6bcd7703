"""
Key-value entry ORM model.

Backs the durable key-value store used for the response cache,
conversation memory, chunk progress and the letter collection.

Dependencies: sqlalchemy, lettercast.boundary.db.base
System role: Durable key-value persistence
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lettercast.boundary.db.base import Base, TimestampMixin


class KVEntryModel(Base, TimestampMixin):
    """
    One key-value pair.

    Attributes:
        key: Namespaced key (e.g. ``memory:<sessionId>``), primary key
        value: Serialized value, JSON text for structured entries
        expires_at: Expiry instant (UTC); NULL never expires
    """

    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(String(512), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<KVEntryModel(key={self.key!r}, expires_at={self.expires_at})>"
