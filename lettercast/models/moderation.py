"""
Moderation domain models.

Dependencies: pydantic
System role: Moderation verdict contract
"""

from enum import Enum

from pydantic import BaseModel, Field


class ContentType(str, Enum):
    """Kinds of text the moderator distinguishes."""

    GENERAL = "general"
    CHAT_MESSAGE = "chat_message"
    TILE_BODY = "tile_body"
    TILE_TITLE = "tile_title"

    @classmethod
    def parse(cls, value: "ContentType | str") -> "ContentType":
        """Coerce a string to a content type, defaulting to GENERAL."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.GENERAL


class ModerationVerdict(BaseModel):
    """Outcome of moderating one finished text span."""

    approved: bool
    reason: str
    moderated_content: str = Field(description="Text safe to emit; '' when rejected")
    original_content: str = ""
    content_type: ContentType = ContentType.GENERAL
