"""Content moderation rules."""

from lettercast.core.moderation.content_moderator import (
    contains_denylisted,
    moderate,
    sanitize_content,
)

__all__ = ["moderate", "sanitize_content", "contains_denylisted"]
