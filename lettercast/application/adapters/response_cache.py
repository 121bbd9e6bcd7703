"""
LLM response cache adapter.

Content-addressed cache of completed replies over the key-value store.
Storage failures degrade to cache misses; they never reach the caller.

Dependencies: hashlib, json (stdlib), lettercast.boundary.kv
System role: Avoids repeat upstream calls for identical non-streaming requests
"""

import hashlib
import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Sequence

from lettercast.application.background import BackgroundTasks
from lettercast.boundary.kv.base import KeyValueStore
from lettercast.models.cache import CachedResponse

logger = logging.getLogger(__name__)

CACHE_PREFIX = "llm:"


def make_cache_key(messages: Sequence[dict[str, Any]], model: str) -> str:
    """
    Deterministic cache key for a message list and model.

    Args:
        messages: Final upstream messages as ``{role, content}`` dicts
        model: Upstream model identifier

    Returns:
        str: ``llm:<model>:<first 16 hex chars of sha256(json(messages))>``
    """
    canonical = json.dumps(
        [{"role": m["role"], "content": m["content"]} for m in messages],
        separators=(",", ":"),
        ensure_ascii=False,
    )
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return f"{CACHE_PREFIX}{model}:{digest[:16]}"


class ResponseCache:
    """Read-through response cache with per-entry expiry."""

    def __init__(self, store: KeyValueStore, ttl_hours: int = 24, enabled: bool = True) -> None:
        """
        Args:
            store: Backing key-value store
            ttl_hours: Default lifetime of new entries
            enabled: When False every read misses and every write is skipped
        """
        self.store = store
        self.ttl_hours = ttl_hours
        self.enabled = enabled
        self.hit_tasks = BackgroundTasks("cache-hits")

    async def get(self, key: str) -> CachedResponse | None:
        """
        Look up a live entry.

        A hit schedules a hit-count increment without waiting for it.

        Args:
            key: Cache key from make_cache_key

        Returns:
            CachedResponse | None: Entry, or None on miss, expiry or storage failure
        """
        if not self.enabled:
            return None
        try:
            data = await self.store.get(key, format="json")
            if not data:
                return None
            entry = CachedResponse.model_validate(data)
        except Exception as e:
            logger.error(
                "Error retrieving cached response",
                extra={"cache_key": key, "error_type": type(e).__name__, "error_msg": str(e)},
            )
            return None

        if entry.expires_at <= datetime.now(timezone.utc):
            return None

        self.hit_tasks.spawn(self._record_hit(key, entry))
        return entry

    async def set(
        self,
        key: str,
        response: str,
        tokens_used: int | None,
        ttl_hours: int | None = None,
    ) -> None:
        """
        Store a reply, replacing any previous entry for the key.

        Args:
            key: Cache key
            response: Final, moderated reply text
            tokens_used: Total tokens the upstream reported
            ttl_hours: Lifetime override
        """
        if not self.enabled:
            return
        hours = self.ttl_hours if ttl_hours is None else ttl_hours
        now = datetime.now(timezone.utc)
        entry = CachedResponse(
            response=response,
            tokens_used=tokens_used,
            created_at=now,
            expires_at=now + timedelta(hours=hours),
        )
        try:
            await self.store.put(
                key,
                entry.model_dump(mode="json", by_alias=True),
                ttl_seconds=int(hours * 3600),
            )
        except Exception as e:
            logger.error(
                "Error caching response",
                extra={"cache_key": key, "error_type": type(e).__name__, "error_msg": str(e)},
            )

    async def _record_hit(self, key: str, entry: CachedResponse) -> None:
        remaining = int((entry.expires_at - datetime.now(timezone.utc)).total_seconds())
        if remaining <= 0:
            return
        updated = entry.model_copy(update={"hit_count": entry.hit_count + 1})
        try:
            await self.store.put(key, updated.model_dump(mode="json", by_alias=True), ttl_seconds=remaining)
        except Exception as e:
            logger.error(
                "Failed to update cache hit",
                extra={"cache_key": key, "error_type": type(e).__name__, "error_msg": str(e)},
            )

    async def purge_expired(self) -> int:
        """
        Delete expired cache entries.

        Returns:
            int: Number of entries removed (0 on storage failure)
        """
        try:
            return await self.store.purge_expired(CACHE_PREFIX)
        except Exception as e:
            logger.error(
                "Error cleaning expired cache",
                extra={"error_type": type(e).__name__, "error_msg": str(e)},
            )
            return 0
