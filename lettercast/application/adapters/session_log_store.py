"""
Session message log adapter.

Appends client-reported messages to ``session:<sessionId>``, keeping the
newest 200. Unlike the other adapters, failures propagate so the
endpoint can report them.

Dependencies: lettercast.boundary.kv
System role: Raw chat transcript logging
"""

from lettercast.boundary.kv.base import KeyValueStore
from lettercast.models.chat import SessionLogEntry

SESSION_LOG_LIMIT = 200


def session_log_key(session_id: str) -> str:
    return f"session:{session_id}"


class SessionLogStore:
    """Bounded per-session message log."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    async def append(self, session_id: str, message: str, timestamp: str) -> int:
        """
        Append one message.

        Args:
            session_id: Client session identifier
            message: Message text
            timestamp: ISO timestamp supplied by the client or the server

        Returns:
            int: Log length after the append

        Raises:
            StorageError: If the store fails
        """
        key = session_log_key(session_id)
        existing = await self.store.get(key, format="json")
        history = existing if isinstance(existing, list) else []
        history.append(SessionLogEntry(timestamp=timestamp, message=message).model_dump())
        history = history[-SESSION_LOG_LIMIT:]
        await self.store.put(key, history)
        return len(history)
