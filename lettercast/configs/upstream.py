"""
Upstream LLM configuration settings.

Credentials, endpoint and model selection for the OpenAI-compatible
chat-completion service the proxy forwards to.

Dependencies: pydantic, pydantic_settings
System role: Upstream provider configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class UpstreamSettings(BaseSettings):
    """OpenAI-compatible upstream configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OPENAI_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(default=None, description="Bearer token for the upstream service")
    base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Base URL; /chat/completions is appended",
    )
    chat_model: str = Field(
        default="gpt-5-mini",
        description="Lower-cost model used for chat and letter modes",
    )
    body_model: str = Field(
        default="gpt-5",
        description="Higher-capability model used for body generation",
    )
    timeout_seconds: float = Field(default=120.0, description="Upstream request timeout")

    @property
    def is_configured(self) -> bool:
        """True when an API key is present."""
        return bool(self.api_key)
