"""
Chunk progress adapter.

Persists the per-session reading cursor under ``chunk-progress:<sessionId>``.
The caller is responsible for only saving a chunk after it passed the
sequential check.

Dependencies: lettercast.boundary.kv, lettercast.models.letter
System role: Letter reading progress persistence
"""

import logging
from datetime import datetime, timezone

from lettercast.boundary.kv.base import KeyValueStore
from lettercast.models.letter import ChunkProgress

logger = logging.getLogger(__name__)


def progress_key(session_id: str) -> str:
    return f"chunk-progress:{session_id}"


class ChunkProgressStore:
    """Load and save reading progress; failures degrade to no tracking."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    async def load(self, session_id: str) -> ChunkProgress | None:
        """
        Load progress for a session.

        Returns:
            ChunkProgress | None: Stored progress, or None when absent or unreadable
        """
        try:
            data = await self.store.get(progress_key(session_id), format="json")
            return ChunkProgress.model_validate(data) if data else None
        except Exception as e:
            logger.error(
                "Error loading chunk progress",
                extra={"session_id": session_id, "error_type": type(e).__name__, "error_msg": str(e)},
            )
            return None

    async def save(self, session_id: str, chunk_number: int, total_chunks: int) -> ChunkProgress:
        """
        Overwrite progress for a session.

        Args:
            session_id: Client session identifier
            chunk_number: Chunk just read
            total_chunks: Size of the letter

        Returns:
            ChunkProgress: The progress record, whether or not the write succeeded
        """
        progress = ChunkProgress(
            last_chunk=chunk_number,
            total_chunks=total_chunks,
            session_id=session_id,
            updated_at=datetime.now(timezone.utc).isoformat(),
        )
        try:
            await self.store.put(progress_key(session_id), progress.model_dump(by_alias=True))
        except Exception as e:
            logger.error(
                "Error saving chunk progress",
                extra={"session_id": session_id, "error_type": type(e).__name__, "error_msg": str(e)},
            )
        return progress
