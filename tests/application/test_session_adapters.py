"""
Test suite for the per-session storage adapters.

Covers conversation memory, chunk progress and the session message log.

System role: Verification of session state persistence
"""

from unittest.mock import AsyncMock

import pytest

from lettercast.application.adapters.chunk_progress_store import ChunkProgressStore
from lettercast.application.adapters.memory_store import ConversationMemoryStore
from lettercast.application.adapters.session_log_store import SESSION_LOG_LIMIT, SessionLogStore
from lettercast.boundary.kv.base import KeyValueStore
from lettercast.core.conversation_memory import update_memory
from lettercast.core.exceptions import StorageError
from lettercast.models.chat import ChatMessage


@pytest.fixture
def failing_store() -> AsyncMock:
    store = AsyncMock(spec=KeyValueStore)
    store.get.side_effect = StorageError("down", operation="get")
    store.put.side_effect = StorageError("down", operation="put")
    return store


class TestConversationMemoryStore:
    """Test suite for ConversationMemoryStore."""

    @pytest.mark.asyncio
    async def test_save_and_load_round_trip_under_memory_key(self, kv_store) -> None:
        # Arrange
        store = ConversationMemoryStore(kv_store)
        memory = update_memory(None, [ChatMessage(role="user", content="Hi"), ChatMessage(role="assistant", content="Hello")])

        # Act
        await store.save("s1", memory)
        loaded = await store.load("s1")

        # Assert
        assert loaded == memory
        raw = await kv_store.get("memory:s1", format="json")
        assert raw["totalMessages"] == 2
        assert raw["recentMessages"][0] == {"role": "user", "content": "Hi"}

    @pytest.mark.asyncio
    async def test_recent_messages_returns_last_five(self, kv_store) -> None:
        # Arrange
        store = ConversationMemoryStore(kv_store)
        messages = [ChatMessage(role="user", content=f"m{i}") for i in range(8)]
        await store.save("s1", update_memory(None, messages))

        # Act
        recent = await store.recent_messages("s1")

        # Assert
        assert [m.content for m in recent] == ["m3", "m4", "m5", "m6", "m7"]

    @pytest.mark.asyncio
    async def test_unknown_session_has_no_messages(self, kv_store) -> None:
        assert await ConversationMemoryStore(kv_store).recent_messages("nobody") == []

    @pytest.mark.asyncio
    async def test_storage_failures_degrade_to_no_memory(self, failing_store) -> None:
        store = ConversationMemoryStore(failing_store)
        assert await store.load("s1") is None
        await store.save("s1", update_memory(None, [ChatMessage(role="user", content="Hi")]))


class TestChunkProgressStore:
    """Test suite for ChunkProgressStore."""

    @pytest.mark.asyncio
    async def test_save_overwrites_and_load_returns_latest(self, kv_store) -> None:
        # Arrange
        store = ChunkProgressStore(kv_store)

        # Act
        await store.save("s1", 1, 3)
        saved = await store.save("s1", 2, 3)
        loaded = await store.load("s1")

        # Assert
        assert loaded.last_chunk == 2
        assert loaded.total_chunks == 3
        assert loaded.session_id == "s1"
        assert saved.to_view() == {"lastChunk": 2, "totalChunks": 3}
        raw = await kv_store.get("chunk-progress:s1", format="json")
        assert raw["lastChunk"] == 2

    @pytest.mark.asyncio
    async def test_failed_write_still_returns_progress(self, failing_store) -> None:
        store = ChunkProgressStore(failing_store)
        progress = await store.save("s1", 1, 3)
        assert progress.last_chunk == 1
        assert await store.load("s1") is None


class TestSessionLogStore:
    """Test suite for SessionLogStore."""

    @pytest.mark.asyncio
    async def test_append_keeps_order(self, kv_store) -> None:
        # Arrange
        store = SessionLogStore(kv_store)

        # Act
        await store.append("s1", "first", "2026-01-01T00:00:00Z")
        length = await store.append("s1", "second", "2026-01-01T00:00:01Z")

        # Assert
        assert length == 2
        log = await kv_store.get("session:s1", format="json")
        assert [entry["message"] for entry in log] == ["first", "second"]

    @pytest.mark.asyncio
    async def test_log_is_capped(self, kv_store) -> None:
        """Test only the newest entries are kept once the cap is reached."""
        # Arrange
        store = SessionLogStore(kv_store)
        await kv_store.put(
            "session:s1",
            [{"timestamp": "t", "message": f"m{i}"} for i in range(SESSION_LOG_LIMIT)],
        )

        # Act
        length = await store.append("s1", "newest", "t")

        # Assert
        log = await kv_store.get("session:s1", format="json")
        assert length == SESSION_LOG_LIMIT
        assert log[0]["message"] == "m1"
        assert log[-1]["message"] == "newest"

    @pytest.mark.asyncio
    async def test_storage_failure_propagates(self, failing_store) -> None:
        with pytest.raises(StorageError):
            await SessionLogStore(failing_store).append("s1", "hi", "t")
