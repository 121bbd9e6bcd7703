"""
In-process key-value store.

Dependencies: asyncio (stdlib)
System role: Default key-value back end for single-process deployments and tests
"""

import asyncio
import time
from typing import Any, Callable

from lettercast.boundary.kv.base import KeyValueStore, ValueFormat, decode_value, serialize_value


class InMemoryKeyValueStore(KeyValueStore):
    """
    Dict-backed store with TTL support.

    Expired entries are invisible to reads and removed lazily.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """
        Args:
            clock: Monotonic time source in seconds (injectable for tests)
        """
        self._entries: dict[str, tuple[str, float | None]] = {}
        self._lock = asyncio.Lock()
        self._clock = clock

    def _is_live(self, expires_at: float | None) -> bool:
        return expires_at is None or expires_at > self._clock()

    async def get(self, key: str, format: ValueFormat = "text") -> Any:
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            raw, expires_at = entry
            if not self._is_live(expires_at):
                del self._entries[key]
                return None
        return decode_value(key, raw, format)

    async def put(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        expires_at = self._clock() + ttl_seconds if ttl_seconds is not None else None
        async with self._lock:
            self._entries[key] = (serialize_value(value), expires_at)

    async def delete(self, key: str) -> bool:
        async with self._lock:
            return self._entries.pop(key, None) is not None

    async def list_keys(self, prefix: str = "") -> list[str]:
        async with self._lock:
            return sorted(
                key
                for key, (_, expires_at) in self._entries.items()
                if key.startswith(prefix) and self._is_live(expires_at)
            )

    async def purge_expired(self, prefix: str = "") -> int:
        async with self._lock:
            expired = [
                key
                for key, (_, expires_at) in self._entries.items()
                if key.startswith(prefix) and not self._is_live(expires_at)
            ]
            for key in expired:
                del self._entries[key]
        return len(expired)
