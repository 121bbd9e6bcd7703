"""
Conversation memory model.

Dependencies: pydantic, lettercast.models.chat
System role: Stored shape of per-session memory
"""

from pydantic import BaseModel, ConfigDict, Field

from lettercast.models.chat import ChatMessage


class ConversationMemory(BaseModel):
    """Rolling window of recent turns plus a periodic summary."""

    model_config = ConfigDict(populate_by_name=True)

    summary: str = ""
    recent_messages: list[ChatMessage] = Field(default_factory=list, alias="recentMessages")
    total_messages: int = Field(default=0, alias="totalMessages")
