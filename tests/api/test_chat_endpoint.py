"""
Test suite for the chat proxy endpoint.

System role: Verification of POST/OPTIONS /api/chat-with-daddy
"""

import httpx
import pytest

from conftest import RecordingUpstream, build_settings, completion_body, parse_sse_events, sse_body

URL = "/api/chat-with-daddy"
SAFE_REPLY = "I love you so much, little one."


def json_upstream(text: str = SAFE_REPLY) -> RecordingUpstream:
    return RecordingUpstream(lambda request: httpx.Response(200, json=completion_body(text)))


class TestChatValidation:
    """Test suite for request rejection."""

    @pytest.mark.parametrize(
        ("body", "message"),
        [
            (b"{not json", "Bad JSON"),
            (b"[]", "Invalid request body"),
            (b'{"messages": "hi"}', "messages must be an array"),
            (b'{"quotes": {}}', "quotes must be an array"),
            (b'{"letterChunks": 1}', "letterChunks must be an array"),
            (b'{"messages": ["hi"]}', "Invalid message structure"),
            (b'{"messages": [{"role": "user", "content": ""}]}', "Invalid message structure"),
            (b'{"messages": [{"role": "user"}]}', "Invalid message structure"),
            (b'{"messages": [{"role": "robot", "content": "hi"}]}', "Invalid message role"),
            (b'{"messages": [], "childAge": "old"}', "Invalid request body"),
        ],
    )
    def test_rejects_malformed_bodies(self, make_api_client, body, message) -> None:
        # Arrange
        upstream = json_upstream()
        client, _ = make_api_client(upstream)

        # Act
        with client:
            response = client.post(URL, content=body, headers={"Content-Type": "application/json"})

        # Assert
        assert response.status_code == 400
        assert response.text == message
        assert response.headers["access-control-allow-origin"] == "*"
        assert upstream.calls == 0

    def test_missing_api_key_is_server_error(self, make_api_client) -> None:
        client, _ = make_api_client(json_upstream(), settings=build_settings(api_key=None))

        with client:
            response = client.post(URL, json={"messages": [{"role": "user", "content": "Hi"}]})

        assert response.status_code == 500
        assert response.text == "Missing OPENAI_API_KEY"


class TestChatResponses:
    """Test suite for successful and upstream-failed requests."""

    def test_non_streaming_reply(self, make_api_client) -> None:
        # Arrange
        client, _ = make_api_client(json_upstream())

        # Act
        with client:
            response = client.post(
                URL,
                json={"messages": [{"role": "user", "content": "Hi"}], "stream": False, "sessionId": "s1"},
            )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["reply"] == SAFE_REPLY
        assert body["cached"] is False
        assert body["chunkProgress"] is None
        assert "responseTimeMs" in body

    def test_repeat_request_is_cached(self, make_api_client) -> None:
        upstream = json_upstream()
        client, _ = make_api_client(upstream)
        body = {"messages": [{"role": "user", "content": "Hi"}], "stream": False}

        with client:
            client.post(URL, json={**body, "sessionId": "a"})
            second = client.post(URL, json={**body, "sessionId": "b"})

        assert second.json()["cached"] is True
        assert second.json()["responseTimeMs"] == 0
        assert upstream.calls == 1

    def test_streaming_reply(self, make_api_client) -> None:
        """Test the default mode streams partial events and one terminal event."""
        # Arrange
        upstream = RecordingUpstream(lambda request: httpx.Response(200, content=sse_body(["I love ", "you."])))
        client, _ = make_api_client(upstream)

        # Act
        with client:
            response = client.post(URL, json={"messages": [{"role": "user", "content": "Hi"}]})

        # Assert
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        assert response.headers["cache-control"] == "no-cache"
        assert response.headers["x-accel-buffering"] == "no"
        events = parse_sse_events(response.text)
        assert [e.get("chunk") for e in events[:-1]] == ["I love", " you."]
        assert events[-1] == {"done": True, "reply": "I love you.", "chunkProgress": None}

    def test_upstream_error_is_relayed(self, make_api_client) -> None:
        upstream = RecordingUpstream(lambda request: httpx.Response(503, text='{"error":"overloaded"}'))
        client, _ = make_api_client(upstream)

        with client:
            response = client.post(URL, json={"messages": [{"role": "user", "content": "Hi"}]})

        assert response.status_code == 503
        assert response.text == '{"error":"overloaded"}'

    def test_out_of_order_chunk_returns_json_error(self, make_api_client) -> None:
        # Arrange
        client, _ = make_api_client(json_upstream())
        body = {
            "messages": [{"role": "user", "content": "Read on"}],
            "letterChunks": [{"chunkNumber": 2, "text": "Second"}, {"chunkNumber": 1, "text": "First"}],
            "sessionId": "fresh",
            "stream": False,
        }

        # Act
        with client:
            response = client.post(URL, json=body)

        # Assert
        assert response.status_code == 400
        assert response.json() == {
            "error": "Sequential reading required. Expected chunk 1, got 2",
            "expectedChunk": 1,
            "currentProgress": None,
        }

    def test_preflight(self, make_api_client) -> None:
        client, _ = make_api_client(json_upstream())

        with client:
            response = client.options(URL)

        assert response.status_code == 200
        assert response.headers["access-control-allow-methods"] == "POST, OPTIONS"
        assert response.headers["access-control-allow-headers"] == "Content-Type"
        assert response.headers["access-control-max-age"] == "86400"
