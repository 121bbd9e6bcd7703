"""
Chat domain models and schemas.

Request/response schemas for the chat proxy endpoint. Field names on
the wire are camelCase; Python attributes are snake_case.

Dependencies: pydantic, lettercast.models.letter
System role: Chat API contracts
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from lettercast.models.letter import LetterChunk

Role = Literal["user", "assistant", "system"]
VALID_ROLES: frozenset[str] = frozenset({"user", "assistant", "system"})


class ChatMessage(BaseModel):
    """One conversation turn."""

    role: Role = Field(description="Message role: 'user', 'assistant' or 'system'")
    content: str = Field(description="Message content")


class Quote(BaseModel):
    """Categorised quote; only some categories reach the prompt."""

    model_config = ConfigDict(extra="allow")

    response_type: str | None = None
    text: str = ""


class ChildrenQuote(BaseModel):
    """Loving-inspiration quote used to set tone."""

    model_config = ConfigDict(extra="allow")

    quote: str = ""


class ChatRequest(BaseModel):
    """Request schema for POST /api/chat-with-daddy."""

    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatMessage] = Field(default_factory=list)
    quotes: list[Quote] = Field(default_factory=list)
    letter_chunks: list[LetterChunk] = Field(default_factory=list, alias="letterChunks")
    children_quotes: list[ChildrenQuote] = Field(default_factory=list, alias="childrenQuotes")
    session_id: str = Field(default="default", alias="sessionId")
    temperature: float | None = None
    max_tokens: int | None = None
    stream: bool | None = None
    parent_type: str = Field(default="dad", alias="parentType")
    child_name: str = Field(default="child", alias="childName")
    child_age: int = Field(default=3, alias="childAge")
    use_custom_system_prompt: bool = Field(default=False, alias="useCustomSystemPrompt")
    system_prompt: str | None = Field(default=None, alias="systemPrompt")

    @property
    def requested_chunk(self) -> int | None:
        """Chunk number of the first client-supplied chunk, if any."""
        if not self.letter_chunks:
            return None
        return self.letter_chunks[0].chunk_number

    @property
    def wants_body_generation(self) -> bool:
        """Both sampling parameters were supplied."""
        return self.temperature is not None and self.max_tokens is not None


class ChatReply(BaseModel):
    """Non-streaming response body."""

    model_config = ConfigDict(populate_by_name=True)

    reply: str
    chunk_progress: dict[str, int] | None = Field(default=None, serialization_alias="chunkProgress")
    cached: bool = False
    response_time_ms: int = Field(default=0, serialization_alias="responseTimeMs")


class ChatHistoryResponse(BaseModel):
    """Response schema for chat history."""

    messages: list[ChatMessage]


class SessionLogEntry(BaseModel):
    """One entry in a session's message log."""

    timestamp: str
    message: str
