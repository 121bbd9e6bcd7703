"""
Test suite for the OpenAI-compatible upstream client.

Uses httpx.MockTransport in place of the network.

System role: Verification of the upstream LLM boundary
"""

import json

import httpx
import pytest

from lettercast.boundary.llm.openai_client import TRANSPORT_ERROR_STATUS, OpenAIChatClient
from lettercast.configs.upstream import UpstreamSettings
from lettercast.core.exceptions import UpstreamError

from conftest import UPSTREAM_BASE_URL, RecordingUpstream, completion_body, mock_client, sse_body


@pytest.fixture
def upstream_settings() -> UpstreamSettings:
    return UpstreamSettings(api_key="sk-test", base_url=UPSTREAM_BASE_URL + "/")


class TestComplete:
    """Test suite for OpenAIChatClient.complete()."""

    @pytest.mark.asyncio
    async def test_posts_payload_with_bearer_auth(self, upstream_settings) -> None:
        # Arrange
        upstream = RecordingUpstream(lambda request: httpx.Response(200, json=completion_body("Hi")))
        client = OpenAIChatClient(upstream_settings, client=mock_client(upstream))

        # Act
        data = await client.complete({"model": "m", "messages": [], "stream": False})

        # Assert
        request = upstream.requests[0]
        assert str(request.url) == f"{UPSTREAM_BASE_URL}/chat/completions"
        assert request.headers["Authorization"] == "Bearer sk-test"
        assert json.loads(request.content)["model"] == "m"
        assert data["choices"][0]["message"]["content"] == "Hi"

    @pytest.mark.asyncio
    async def test_non_success_status_raises_with_body(self, upstream_settings) -> None:
        client = OpenAIChatClient(
            upstream_settings,
            client=mock_client(lambda request: httpx.Response(429, text="rate limited")),
        )

        with pytest.raises(UpstreamError) as exc_info:
            await client.complete({"model": "m", "messages": []})

        assert exc_info.value.status_code == 429
        assert exc_info.value.body == "rate limited"

    @pytest.mark.asyncio
    async def test_transport_failure_maps_to_bad_gateway(self, upstream_settings) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = OpenAIChatClient(upstream_settings, client=mock_client(refuse))

        with pytest.raises(UpstreamError) as exc_info:
            await client.complete({"model": "m", "messages": []})

        assert exc_info.value.status_code == TRANSPORT_ERROR_STATUS

    @pytest.mark.asyncio
    async def test_invalid_json_maps_to_bad_gateway(self, upstream_settings) -> None:
        client = OpenAIChatClient(
            upstream_settings,
            client=mock_client(lambda request: httpx.Response(200, text="<html>")),
        )

        with pytest.raises(UpstreamError) as exc_info:
            await client.complete({"model": "m", "messages": []})

        assert exc_info.value.status_code == TRANSPORT_ERROR_STATUS


class TestOpenStream:
    """Test suite for OpenAIChatClient.open_stream()."""

    @pytest.mark.asyncio
    async def test_returns_open_response(self, upstream_settings) -> None:
        # Arrange
        client = OpenAIChatClient(
            upstream_settings,
            client=mock_client(lambda request: httpx.Response(200, content=sse_body(["Hi"]))),
        )

        # Act
        response = await client.open_stream({"model": "m", "messages": [], "stream": True})
        body = b"".join([chunk async for chunk in response.aiter_bytes()])
        await response.aclose()

        # Assert
        assert body.startswith(b"data: ")

    @pytest.mark.asyncio
    async def test_error_status_reads_body_and_raises(self, upstream_settings) -> None:
        client = OpenAIChatClient(
            upstream_settings,
            client=mock_client(lambda request: httpx.Response(401, text='{"error":"bad key"}')),
        )

        with pytest.raises(UpstreamError) as exc_info:
            await client.open_stream({"model": "m", "messages": [], "stream": True})

        assert exc_info.value.status_code == 401
        assert exc_info.value.body == '{"error":"bad key"}'

    def test_is_configured_follows_api_key(self) -> None:
        assert OpenAIChatClient(UpstreamSettings(api_key=None)).is_configured is False
        assert OpenAIChatClient(UpstreamSettings(api_key="k")).is_configured is True
