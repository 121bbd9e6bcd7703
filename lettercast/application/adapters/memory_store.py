"""
Conversation memory adapter.

Persists per-session memory under ``memory:<sessionId>``. Writes are
unconditional, so concurrent requests for one session are
last-writer-wins.

Dependencies: lettercast.boundary.kv, lettercast.models.memory
System role: Conversation memory persistence
"""

import logging

from lettercast.boundary.kv.base import KeyValueStore
from lettercast.models.chat import ChatMessage
from lettercast.models.memory import ConversationMemory

logger = logging.getLogger(__name__)


def memory_key(session_id: str) -> str:
    return f"memory:{session_id}"


class ConversationMemoryStore:
    """Load and save conversation memory; failures degrade to no memory."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    async def load(self, session_id: str) -> ConversationMemory | None:
        """
        Load memory for a session.

        Args:
            session_id: Client session identifier

        Returns:
            ConversationMemory | None: Stored memory, or None when absent or unreadable
        """
        try:
            data = await self.store.get(memory_key(session_id), format="json")
            return ConversationMemory.model_validate(data) if data else None
        except Exception as e:
            logger.error(
                "Error loading memory",
                extra={"session_id": session_id, "error_type": type(e).__name__, "error_msg": str(e)},
            )
            return None

    async def save(self, session_id: str, memory: ConversationMemory) -> None:
        """
        Persist memory for a session.

        Args:
            session_id: Client session identifier
            memory: Memory to store
        """
        try:
            await self.store.put(memory_key(session_id), memory.model_dump(mode="json", by_alias=True))
        except Exception as e:
            logger.error(
                "Error saving memory",
                extra={"session_id": session_id, "error_type": type(e).__name__, "error_msg": str(e)},
            )

    async def recent_messages(self, session_id: str, limit: int = 5) -> list[ChatMessage]:
        """Last ``limit`` remembered messages, oldest first."""
        memory = await self.load(session_id)
        if memory is None:
            return []
        return memory.recent_messages[-limit:]
