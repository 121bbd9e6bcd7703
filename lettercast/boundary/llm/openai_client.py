"""
OpenAI-compatible chat completion client.

Thin async wrapper over the ``/chat/completions`` endpoint. Non-2xx
answers are raised as UpstreamError carrying the raw status and body
so callers can relay them verbatim. No retries.

Dependencies: httpx, lettercast.configs.upstream, lettercast.core.exceptions
System role: Upstream LLM boundary
"""

import logging
from typing import Any

import httpx

from lettercast.configs.upstream import UpstreamSettings
from lettercast.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)

TRANSPORT_ERROR_STATUS = 502


class OpenAIChatClient:
    """Client for an OpenAI-style chat completion service."""

    def __init__(
        self,
        settings: UpstreamSettings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Upstream settings (key, base URL, timeout)
            client: Pre-built httpx client, e.g. one with a mock transport
        """
        self.settings = settings
        self._client = client or httpx.AsyncClient(timeout=settings.timeout_seconds)
        self._url = f"{settings.base_url.rstrip('/')}/chat/completions"

    @property
    def is_configured(self) -> bool:
        """True when an API key is available."""
        return self.settings.is_configured

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.api_key}",
        }

    async def complete(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Issue a non-streaming completion.

        Args:
            payload: Chat completion request body

        Returns:
            dict: Parsed upstream JSON body

        Raises:
            UpstreamError: On non-2xx status, transport failure or invalid JSON
        """
        try:
            response = await self._client.post(self._url, json=payload, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(
                "Upstream request failed",
                extra={"model": payload.get("model"), "error_type": type(e).__name__, "error_msg": str(e)},
            )
            raise UpstreamError(TRANSPORT_ERROR_STATUS, f"Upstream request failed: {e}") from e

        if not response.is_success:
            logger.warning(
                "Upstream returned error status",
                extra={"model": payload.get("model"), "status_code": response.status_code},
            )
            raise UpstreamError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(TRANSPORT_ERROR_STATUS, "Upstream returned invalid JSON") from e

    async def open_stream(self, payload: dict[str, Any]) -> httpx.Response:
        """
        Start a streaming completion.

        The caller owns the returned response and must ``aclose()`` it.

        Args:
            payload: Chat completion request body with ``stream: true``

        Returns:
            httpx.Response: Open response whose body has not been read

        Raises:
            UpstreamError: On non-2xx status or transport failure
        """
        request = self._client.build_request("POST", self._url, json=payload, headers=self._headers())
        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as e:
            logger.error(
                "Upstream stream failed to open",
                extra={"model": payload.get("model"), "error_type": type(e).__name__, "error_msg": str(e)},
            )
            raise UpstreamError(TRANSPORT_ERROR_STATUS, f"Upstream request failed: {e}") from e

        if not response.is_success:
            try:
                body = (await response.aread()).decode("utf-8", errors="replace")
            finally:
                await response.aclose()
            logger.warning(
                "Upstream returned error status",
                extra={"model": payload.get("model"), "status_code": response.status_code},
            )
            raise UpstreamError(response.status_code, body)

        return response

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
