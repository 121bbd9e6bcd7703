"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from lettercast.boundary.db.CRUD import kv_entry_crud

    entry = await kv_entry_crud.get_live(db, "memory:s1")
"""

from lettercast.boundary.db.CRUD.audit_crud import (
    ModerationLogCRUD,
    UsageLogCRUD,
    moderation_log_crud,
    usage_log_crud,
)
from lettercast.boundary.db.CRUD.base_crud import BaseCRUD
from lettercast.boundary.db.CRUD.kv_entry_crud import KVEntryCRUD, kv_entry_crud

__all__ = [
    "BaseCRUD",
    "KVEntryCRUD",
    "kv_entry_crud",
    "UsageLogCRUD",
    "usage_log_crud",
    "ModerationLogCRUD",
    "moderation_log_crud",
]
