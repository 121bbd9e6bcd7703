"""
Test suite for the health check endpoint.

System role: Verification of GET /api/health
"""

from unittest.mock import AsyncMock

import httpx

from lettercast.core.exceptions import StorageError

from conftest import build_settings


def unused_upstream(request: httpx.Request) -> httpx.Response:
    raise AssertionError("upstream must not be called")


class TestHealth:
    """Test suite for GET /api/health."""

    def test_healthy_when_store_and_upstream_ready(self, make_api_client) -> None:
        client, _ = make_api_client(unused_upstream)

        with client:
            response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "checks": {"kv": "healthy", "upstream": "configured", "audit": "disabled"},
        }

    def test_degraded_without_api_key(self, make_api_client) -> None:
        client, _ = make_api_client(unused_upstream, settings=build_settings(api_key=None))

        with client:
            response = client.get("/api/health")

        assert response.json()["status"] == "degraded"
        assert response.json()["checks"]["upstream"] == "not_configured"

    def test_degraded_when_store_fails(self, make_api_client) -> None:
        # Arrange
        client, cache = make_api_client(unused_upstream)
        cache._kv_store = AsyncMock()
        cache._kv_store.put.side_effect = StorageError("store offline", operation="put")

        # Act
        with client:
            response = client.get("/api/health")

        # Assert
        assert response.json()["status"] == "degraded"
        assert response.json()["checks"]["kv"] == "unhealthy"
