"""
Narrative letter source configuration.

Dependencies: pydantic, pydantic_settings
System role: Origin location of the pre-authored letter chunks
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LetterSettings(BaseSettings):
    """Where the ordered letter chunks are fetched from."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LETTER_",
        case_sensitive=False,
        extra="ignore",
    )

    origin_base_url: str = Field(
        default="https://toharper.dad",
        description="Origin file server hosting the letter JSON",
    )
    chunks_path: str = Field(
        default="/data/dads_letter.json",
        description="Path of the letter JSON on the origin",
    )
    local_path: str | None = Field(
        default=None,
        description="Filesystem fallback for the letter JSON when the origin is unreachable",
    )

    @property
    def origin_url(self) -> str:
        """Absolute URL of the letter JSON."""
        return f"{self.origin_base_url.rstrip('/')}{self.chunks_path}"
