"""
Database models package.

Exports:
  - KVEntryModel: Durable key-value entry
  - LLMUsageLogModel: Upstream usage audit record
  - ModerationLogModel: Moderation audit record

Dependencies: sqlalchemy, lettercast.boundary.db.base
System role: Database model definitions
"""

from lettercast.boundary.db.models.kv_entry_model import KVEntryModel
from lettercast.boundary.db.models.moderation_log_model import ModerationLogModel
from lettercast.boundary.db.models.usage_log_model import LLMUsageLogModel

__all__ = [
    "KVEntryModel",
    "LLMUsageLogModel",
    "ModerationLogModel",
]
