"""
Test suite for letter chunk sequencing rules.

System role: Verification of sequential reading policy
"""

import pytest

from lettercast.core.chunk_sequence import dedupe_chunks, find_chunk, next_expected_chunk
from lettercast.models.letter import ChunkProgress, LetterChunk


class TestNextExpectedChunk:
    """Test suite for next_expected_chunk."""

    def test_fresh_session_starts_at_one(self) -> None:
        assert next_expected_chunk(None, 3) == 1

    @pytest.mark.parametrize(("last", "expected"), [(1, 2), (2, 3), (3, 3), (7, 3), (0, 1)])
    def test_clamps_to_total(self, last: int, expected: int) -> None:
        progress = ChunkProgress(last_chunk=last, total_chunks=3)
        assert next_expected_chunk(progress, 3) == expected


class TestDedupeChunks:
    """Test suite for dedupe_chunks."""

    def test_keeps_first_occurrence_and_reports_duplicates(self) -> None:
        # Arrange
        raw = [
            {"chunk": 1, "content": "a"},
            {"chunk": 2, "content": "b"},
            {"chunk": 1, "content": "again"},
            {"chunkNumber": 3, "content": "c"},
        ]

        # Act
        unique, duplicates = dedupe_chunks(raw)

        # Assert
        assert [entry["content"] for entry in unique] == ["a", "b", "c"]
        assert duplicates == [1]

    def test_skips_malformed_entries(self) -> None:
        unique, duplicates = dedupe_chunks(["text", {"chunk": "1"}, {"chunk": True}, {"content": "x"}, {"chunk": 4}])
        assert unique == [{"chunk": 4}]
        assert duplicates == []


class TestFindChunk:
    """Test suite for find_chunk."""

    def test_finds_by_number(self) -> None:
        chunks = [LetterChunk(chunk_number=1, text="a"), LetterChunk(chunk_number=2, text="b")]
        assert find_chunk(chunks, 2).text == "b"
        assert find_chunk(chunks, 5) is None
        assert find_chunk(chunks, None) is None
