"""
Narrative letter domain models.

Chunks arrive either from the client (``chunkNumber``/``styleHint``)
or from the origin letter file (``chunk``/``SYSTEM_PROMPT``/``content``),
so both spellings are accepted on input.

Dependencies: pydantic
System role: Letter chunk and reading progress contracts
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class LetterChunk(BaseModel):
    """One ordered unit of the pre-authored letter."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    chunk_number: int | None = Field(
        default=None,
        validation_alias=AliasChoices("chunkNumber", "chunk", "chunk_number"),
        serialization_alias="chunkNumber",
    )
    text: str = Field(default="", validation_alias=AliasChoices("text", "content"))
    style_hint: str | None = Field(
        default=None,
        validation_alias=AliasChoices("styleHint", "SYSTEM_PROMPT", "style_hint"),
        serialization_alias="styleHint",
    )
    interaction_hint: str | None = None
    topics: list[str] | str = Field(default_factory=list)

    def format_as_prompt(self, style_hint: str) -> str:
        """Render the chunk as the user turn that asks for it to be read."""
        topics = ", ".join(self.topics) if isinstance(self.topics, list) else self.topics
        return (
            f"SYSTEM_PROMPT: {style_hint}\n\n"
            f"interaction_hint: {self.interaction_hint or ''}\n\n"
            f"topics: {topics}\n\n"
            f"----\n\n"
            f"content: {self.text}"
        )


class ChunkProgress(BaseModel):
    """Per-session reading cursor."""

    model_config = ConfigDict(populate_by_name=True)

    last_chunk: int = Field(alias="lastChunk")
    total_chunks: int = Field(alias="totalChunks")
    session_id: str | None = Field(default=None, alias="sessionId")
    updated_at: str | None = Field(default=None, alias="updatedAt")

    def to_view(self, total_chunks: int | None = None) -> dict[str, int]:
        """Client-facing ``{lastChunk, totalChunks}`` pair."""
        return {
            "lastChunk": self.last_chunk,
            "totalChunks": self.total_chunks if total_chunks is None else total_chunks,
        }


class LetterCacheResult(BaseModel):
    """Outcome of warming the letter chunk cache."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    chunks_count: int | None = Field(default=None, serialization_alias="chunksCount")
    duplicates_removed: int | None = Field(default=None, serialization_alias="duplicatesRemoved")
    cached: bool | None = None
