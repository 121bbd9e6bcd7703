"""
Test suite for the origin letter source.

System role: Verification of the origin file boundary
"""

import json

import httpx
import pytest

from lettercast.boundary.origin.letter_source import LetterSource
from lettercast.configs.letter import LetterSettings
from lettercast.core.exceptions import LetterSourceError

from conftest import ORIGIN_BASE_URL, RecordingUpstream, mock_client

CHUNKS = [{"chunk": 1, "content": "Once"}, {"chunk": 2, "content": "upon"}]


def _settings(local_path: str | None = None) -> LetterSettings:
    return LetterSettings(origin_base_url=ORIGIN_BASE_URL + "/", chunks_path="/data/letter.json", local_path=local_path)


class TestFetchChunks:
    """Test suite for LetterSource.fetch_chunks()."""

    @pytest.mark.asyncio
    async def test_fetches_array_from_origin(self) -> None:
        # Arrange
        origin = RecordingUpstream(lambda request: httpx.Response(200, json=CHUNKS))
        source = LetterSource(_settings(), client=mock_client(origin))

        # Act
        chunks = await source.fetch_chunks()

        # Assert
        assert chunks == CHUNKS
        assert str(origin.requests[0].url) == f"{ORIGIN_BASE_URL}/data/letter.json"

    @pytest.mark.asyncio
    async def test_falls_back_to_local_file(self, tmp_path) -> None:
        # Arrange
        local = tmp_path / "letter.json"
        local.write_text(json.dumps(CHUNKS), encoding="utf-8")
        source = LetterSource(
            _settings(str(local)),
            client=mock_client(lambda request: httpx.Response(503)),
        )

        # Act / Assert
        assert await source.fetch_chunks() == CHUNKS

    @pytest.mark.asyncio
    async def test_raises_without_fallback(self) -> None:
        source = LetterSource(_settings(), client=mock_client(lambda request: httpx.Response(404)))

        with pytest.raises(LetterSourceError):
            await source.fetch_chunks()

    @pytest.mark.asyncio
    async def test_rejects_non_array_document(self) -> None:
        source = LetterSource(_settings(), client=mock_client(lambda request: httpx.Response(200, json={"chunk": 1})))

        with pytest.raises(LetterSourceError):
            await source.fetch_chunks()

    @pytest.mark.asyncio
    async def test_unreadable_local_file_raises(self, tmp_path) -> None:
        source = LetterSource(
            _settings(str(tmp_path / "missing.json")),
            client=mock_client(lambda request: httpx.Response(500)),
        )

        with pytest.raises(LetterSourceError):
            await source.fetch_chunks()
