"""
Narrative letter chunk service.

Loads the ordered letter chunks, preferring the copy cached in the
key-value store and filling it from the origin on a miss. The cached
collection is deduplicated by chunk number and never expires.

Dependencies: lettercast.boundary.kv, lettercast.boundary.origin, lettercast.core.chunk_sequence
System role: Letter collection loader for letter mode and cache warm-up
"""

import logging
from typing import Any

from pydantic import ValidationError

from lettercast.boundary.kv.base import KeyValueStore
from lettercast.boundary.origin.letter_source import LetterSource
from lettercast.core.chunk_sequence import dedupe_chunks
from lettercast.core.exceptions import LetterSourceError
from lettercast.models.letter import LetterCacheResult, LetterChunk

logger = logging.getLogger(__name__)

LETTER_CHUNKS_KEY = "letter:chunks"


def parse_chunks(raw_chunks: list[Any]) -> list[LetterChunk]:
    """Validate raw chunk dicts, skipping entries that do not parse."""
    chunks: list[LetterChunk] = []
    for entry in raw_chunks:
        try:
            chunks.append(LetterChunk.model_validate(entry))
        except ValidationError:
            logger.warning("Skipping malformed letter chunk", extra={"entry_type": type(entry).__name__})
    return chunks


class LetterChunkService:
    """Cached access to the narrative letter."""

    def __init__(self, store: KeyValueStore, source: LetterSource) -> None:
        """
        Args:
            store: Key-value store holding the cached collection
            source: Origin letter source
        """
        self.store = store
        self.source = source

    async def _cached_raw(self) -> list[Any]:
        cached = await self.store.get(LETTER_CHUNKS_KEY, format="json")
        if isinstance(cached, list) and cached:
            return cached
        return []

    async def _fetch_unique(self) -> tuple[list[dict[str, Any]], list[int]]:
        try:
            raw = await self.source.fetch_chunks()
        except LetterSourceError as e:
            logger.error("Error fetching letter chunks", extra={"error_msg": str(e)})
            return [], []
        return dedupe_chunks(raw)

    async def load_chunks(self) -> list[LetterChunk]:
        """
        Load the letter, filling the cache on a miss.

        Storage failures fall back to fetching the origin directly;
        origin failures yield an empty collection.

        Returns:
            list[LetterChunk]: Deduplicated chunks in origin order
        """
        try:
            cached = await self._cached_raw()
            if cached:
                logger.debug("Loaded letter chunks from cache", extra={"chunks_count": len(cached)})
                return parse_chunks(cached)

            unique, _ = await self._fetch_unique()
            if unique:
                await self.store.put(LETTER_CHUNKS_KEY, unique)
                logger.info("Cached letter chunks", extra={"chunks_count": len(unique)})
            return parse_chunks(unique)
        except Exception as e:
            logger.error(
                "Error loading letter chunks from store",
                extra={"error_type": type(e).__name__, "error_msg": str(e)},
            )
            unique, _ = await self._fetch_unique()
            return parse_chunks(unique)

    async def warm_cache(self) -> LetterCacheResult:
        """
        Populate the cached collection unless it is already present.

        Returns:
            LetterCacheResult: ``success`` is False when the origin had no chunks

        Raises:
            StorageError: If the store cannot be read or written
        """
        existing = await self._cached_raw()
        if existing:
            return LetterCacheResult(
                success=True,
                message="Chunks already cached",
                chunks_count=len(existing),
                cached=True,
            )

        unique, duplicates = await self._fetch_unique()
        if not unique:
            return LetterCacheResult(success=False, message="No letter chunks found in file")

        await self.store.put(LETTER_CHUNKS_KEY, unique)
        logger.info(
            "Letter chunk cache warmed",
            extra={"chunks_count": len(unique), "duplicates_removed": len(duplicates)},
        )
        return LetterCacheResult(
            success=True,
            message="Letter chunks cached successfully",
            chunks_count=len(unique),
            duplicates_removed=len(duplicates),
            cached=False,
        )
