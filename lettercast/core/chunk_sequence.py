"""
Letter chunk sequencing rules.

Dependencies: lettercast.models.letter
System role: Sequential reading policy and chunk collection hygiene
"""

import logging
from typing import Any, Iterable, Sequence

from lettercast.models.letter import ChunkProgress, LetterChunk

logger = logging.getLogger(__name__)


def next_expected_chunk(progress: ChunkProgress | None, total_chunks: int) -> int:
    """
    Chunk number the session must read next.

    Args:
        progress: Stored progress, or None for a fresh session
        total_chunks: Size of the letter

    Returns:
        int: ``lastChunk + 1`` clamped to ``[1, total_chunks]``; 1 without progress
    """
    if progress is None or not progress.last_chunk:
        return 1
    return max(1, min(progress.last_chunk + 1, total_chunks))


def dedupe_chunks(raw_chunks: Iterable[Any]) -> tuple[list[dict[str, Any]], list[int]]:
    """
    Drop malformed entries and repeated chunk numbers.

    Entries must be objects with an integer ``chunk`` (or ``chunkNumber``).
    The first occurrence of a number wins.

    Args:
        raw_chunks: Entries decoded from the origin letter file

    Returns:
        tuple: (unique chunk dicts in input order, duplicate numbers dropped)
    """
    unique: list[dict[str, Any]] = []
    duplicates: list[int] = []
    seen: set[int] = set()

    for entry in raw_chunks:
        if not isinstance(entry, dict):
            continue
        number = entry.get("chunk", entry.get("chunkNumber"))
        if not isinstance(number, int) or isinstance(number, bool):
            continue
        if number in seen:
            duplicates.append(number)
            continue
        seen.add(number)
        unique.append(entry)

    if duplicates:
        logger.warning(
            "Duplicate letter chunk numbers dropped",
            extra={"duplicates": sorted(set(duplicates)), "duplicate_count": len(duplicates)},
        )
    return unique, duplicates


def find_chunk(chunks: Sequence[LetterChunk], chunk_number: int | None) -> LetterChunk | None:
    """Chunk with the given number, or None."""
    if chunk_number is None:
        return None
    for chunk in chunks:
        if chunk.chunk_number == chunk_number:
            return chunk
    return None
