"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), create_tables(): Async connection management
  - KVEntryModel, LLMUsageLogModel, ModerationLogModel: Tables
  - kv_entry_crud, usage_log_crud, moderation_log_crud: CRUD singletons

Dependencies: sqlalchemy, lettercast.configs
System role: Relational adapter for the durable key-value store and audit logs
"""

from lettercast.boundary.db.base import Base, TimestampMixin, UUIDMixin
from lettercast.boundary.db.connection import (
    create_tables,
    get_async_engine,
    get_async_session_factory,
)
from lettercast.boundary.db.models import KVEntryModel, LLMUsageLogModel, ModerationLogModel
from lettercast.boundary.db.CRUD import (
    BaseCRUD,
    kv_entry_crud,
    moderation_log_crud,
    usage_log_crud,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "create_tables",
    "get_async_engine",
    "get_async_session_factory",
    "KVEntryModel",
    "LLMUsageLogModel",
    "ModerationLogModel",
    "BaseCRUD",
    "kv_entry_crud",
    "usage_log_crud",
    "moderation_log_crud",
]
