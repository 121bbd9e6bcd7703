"""
LLM response cache configuration.

Dependencies: pydantic_settings
System role: Response cache tuning
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class CacheSettings(BaseSettings):
    """Response cache configuration."""

    enabled: bool = Field(default=True, description="Serve and store cached completions")
    ttl_hours: int = Field(default=24, description="Hours before a cached completion expires")

    class Config:
        """Pydantic config for environment variable loading."""

        env_prefix = "LLM_CACHE_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
