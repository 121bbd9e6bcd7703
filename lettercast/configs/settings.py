"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from lettercast.configs.base import BaseSettings
from lettercast.configs.cache import CacheSettings
from lettercast.configs.letter import LetterSettings
from lettercast.configs.storage import StorageSettings
from lettercast.configs.upstream import UpstreamSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    upstream: UpstreamSettings = UpstreamSettings()
    storage: StorageSettings = StorageSettings()
    letter: LetterSettings = LetterSettings()
    cache: CacheSettings = CacheSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from lettercast.configs import get_settings
        settings = get_settings()
    """
    return Settings()
