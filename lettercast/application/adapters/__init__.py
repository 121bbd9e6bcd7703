"""Storage adapters over the key-value store."""

from .chunk_progress_store import ChunkProgressStore
from .memory_store import ConversationMemoryStore
from .response_cache import ResponseCache, make_cache_key
from .session_log_store import SessionLogStore

__all__ = [
    "ChunkProgressStore",
    "ConversationMemoryStore",
    "ResponseCache",
    "SessionLogStore",
    "make_cache_key",
]
