"""
Key-value store interface.

Values are stored as text. Structured values are serialized to JSON
on write and decoded on ``get(key, format="json")``.

Dependencies: abc, json (stdlib)
System role: Storage contract for cache, memory, progress and letter data
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Literal

from lettercast.core.exceptions import StorageError

ValueFormat = Literal["text", "json"]


def serialize_value(value: Any) -> str:
    """Text as-is, anything else as compact JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def decode_value(key: str, raw: str | None, format: ValueFormat) -> Any:
    """
    Decode a stored value.

    Raises:
        StorageError: If a JSON read finds text that is not JSON
    """
    if raw is None or format == "text":
        return raw
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise StorageError("Stored value is not valid JSON", operation="get", key=key) from e


class KeyValueStore(ABC):
    """Async key-value store with optional per-entry TTL."""

    @abstractmethod
    async def get(self, key: str, format: ValueFormat = "text") -> Any:
        """
        Read a live value.

        Args:
            key: Entry key
            format: ``text`` returns the stored string, ``json`` decodes it

        Returns:
            The value, or None when missing or expired

        Raises:
            StorageError: If the back end fails
        """

    @abstractmethod
    async def put(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        """
        Write a value, replacing any previous one.

        Args:
            key: Entry key
            value: String, or any JSON-serializable value
            ttl_seconds: Lifetime; None keeps the entry forever

        Raises:
            StorageError: If the back end fails
        """

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove a key. Returns True if it existed."""

    @abstractmethod
    async def list_keys(self, prefix: str = "") -> list[str]:
        """Live keys starting with ``prefix``, sorted."""

    @abstractmethod
    async def purge_expired(self, prefix: str = "") -> int:
        """Delete expired entries under ``prefix``; returns the count."""

    async def close(self) -> None:
        """Release back-end resources."""
        return None
