"""
Streaming event schemas for the chat proxy.

Each event is sent to the client as a single ``data: <json>`` SSE frame.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

from pydantic import BaseModel, ConfigDict, Field


class _SSEFrame(BaseModel):
    def to_sse(self) -> str:
        """Serialize as one server-sent-event frame."""
        return f"data: {self.model_dump_json(by_alias=True)}\n\n"


class PartialEvent(_SSEFrame):
    """
    Incremental reveal event.

    Attributes:
        chunk: The raw delta just received upstream
        reply: Cumulative cleaned reply so far
    """

    chunk: str
    reply: str


class TerminalEvent(_SSEFrame):
    """Final event; committed after all side effects ran."""

    model_config = ConfigDict(populate_by_name=True)

    done: bool = True
    reply: str
    chunk_progress: dict[str, int] | None = Field(default=None, serialization_alias="chunkProgress")


class StreamErrorEvent(_SSEFrame):
    """Terminal event for an upstream failure after streaming started."""

    error: str
    done: bool = True
