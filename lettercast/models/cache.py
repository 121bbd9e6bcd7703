"""
Response cache entry model.

Dependencies: pydantic
System role: Stored shape of cached upstream completions
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CachedResponse(BaseModel):
    """A previously produced reply and its token cost."""

    model_config = ConfigDict(populate_by_name=True)

    response: str
    tokens_used: int | None = Field(default=None, alias="tokensUsed")
    created_at: datetime = Field(alias="createdAt")
    expires_at: datetime = Field(alias="expiresAt")
    hit_count: int = Field(default=0, alias="hitCount")
