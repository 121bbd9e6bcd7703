"""
Storage configuration settings.

Selects the key-value back end for cache, memory and chunk progress,
and configures the optional relational audit store.

Dependencies: pydantic, pydantic_settings
System role: Persistence configuration
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from lettercast.configs.base import BaseSettings


class StorageSettings(BaseSettings):
    """Key-value and audit storage configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STORAGE_",
        case_sensitive=False,
        extra="ignore",
    )

    kv_backend: Literal["memory", "database"] = Field(
        default="memory",
        description="Key-value back end: 'memory' (process-local) or 'database' (SQLAlchemy)",
    )
    database_url: str = Field(
        default="sqlite+aiosqlite:///./lettercast.db",
        description="Async SQLAlchemy URL for the durable store and audit tables",
    )
    audit_enabled: bool = Field(
        default=False,
        description="Write usage and moderation audit rows to the relational store",
    )
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    @property
    def uses_database(self) -> bool:
        """True when any component needs the SQL engine."""
        return self.kv_backend == "database" or self.audit_enabled
