"""
Origin letter file source.

Fetches the raw ordered letter chunks from the origin file server,
falling back to a local copy of the same JSON file when configured.

Dependencies: httpx, lettercast.configs.letter
System role: Origin boundary for the narrative letter
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import httpx

from lettercast.configs.letter import LetterSettings
from lettercast.core.exceptions import LetterSourceError

logger = logging.getLogger(__name__)


class LetterSource:
    """Reads the letter JSON array from the origin."""

    def __init__(self, settings: LetterSettings, client: httpx.AsyncClient | None = None) -> None:
        """
        Args:
            settings: Letter origin settings
            client: Pre-built httpx client, e.g. one with a mock transport
        """
        self.settings = settings
        self._client = client or httpx.AsyncClient(timeout=30.0)

    async def fetch_chunks(self) -> list[Any]:
        """
        Fetch the raw chunk array.

        Returns:
            list: Decoded JSON array, entries not yet validated

        Raises:
            LetterSourceError: If neither the origin nor the local copy yields an array
        """
        url = self.settings.origin_url
        try:
            response = await self._client.get(url)
            if response.is_success:
                return self._require_array(response.json(), url)
            logger.warning(
                "Letter origin returned error status",
                extra={"url": url, "status_code": response.status_code},
            )
            origin_error = f"status {response.status_code}"
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(
                "Letter origin fetch failed",
                extra={"url": url, "error_type": type(e).__name__, "error_msg": str(e)},
            )
            origin_error = str(e)

        if self.settings.local_path:
            return await self._read_local(Path(self.settings.local_path))

        raise LetterSourceError(
            f"Failed to fetch letter chunks: {origin_error}",
            {"url": url},
        )

    async def _read_local(self, path: Path) -> list[Any]:
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
            return self._require_array(json.loads(text), str(path))
        except (OSError, ValueError) as e:
            raise LetterSourceError(
                f"Failed to read local letter chunks: {e}",
                {"path": str(path)},
            ) from e

    @staticmethod
    def _require_array(data: Any, location: str) -> list[Any]:
        if not isinstance(data, list):
            raise LetterSourceError(
                "Letter chunks file does not contain an array",
                {"location": location},
            )
        return data

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
