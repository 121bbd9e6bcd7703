"""
Shared test fixtures and configuration for entire test suite.

Provides: settings builders, in-memory key-value store, in-memory SQLite
engine, mock upstream and origin transports, service container factory
Dependencies: pytest, pytest-asyncio, httpx, sqlalchemy
System role: Test infrastructure and fixture management
"""

import json
from typing import Any, Callable

import httpx
import pytest

from lettercast.configs.cache import CacheSettings
from lettercast.configs.letter import LetterSettings
from lettercast.configs.settings import Settings
from lettercast.configs.storage import StorageSettings
from lettercast.configs.upstream import UpstreamSettings

UPSTREAM_BASE_URL = "https://upstream.test/v1"
ORIGIN_BASE_URL = "https://origin.test"

Handler = Callable[[httpx.Request], httpx.Response]


def build_settings(api_key: str | None = "test-key", **storage: Any) -> Settings:
    """Settings pointing at the mock upstream and origin."""
    return Settings(
        upstream=UpstreamSettings(api_key=api_key, base_url=UPSTREAM_BASE_URL),
        storage=StorageSettings(**storage),
        letter=LetterSettings(origin_base_url=ORIGIN_BASE_URL, chunks_path="/data/letter.json", local_path=None),
        cache=CacheSettings(enabled=True, ttl_hours=24),
    )


def completion_body(text: str, prompt_tokens: int = 12, completion_tokens: int = 8) -> dict[str, Any]:
    """Non-streaming upstream completion body."""
    return {
        "choices": [{"index": 0, "message": {"role": "assistant", "content": text}, "finish_reason": "stop"}],
        "usage": {
            "prompt_tokens": prompt_tokens,
            "completion_tokens": completion_tokens,
            "total_tokens": prompt_tokens + completion_tokens,
        },
    }


def sse_body(deltas: list[str], finish: bool = True, done: bool = True) -> bytes:
    """Upstream SSE stream carrying the given deltas."""
    frames = [
        "data: " + json.dumps({"choices": [{"index": 0, "delta": {"content": delta}, "finish_reason": None}]})
        for delta in deltas
    ]
    if finish:
        frames.append("data: " + json.dumps({"choices": [{"index": 0, "delta": {}, "finish_reason": "stop"}]}))
    if done:
        frames.append("data: [DONE]")
    return ("\n\n".join(frames) + "\n\n").encode("utf-8")


def parse_sse_events(text: str) -> list[dict[str, Any]]:
    """Decode client-facing ``data: <json>`` frames."""
    return [
        json.loads(frame[len("data: "):])
        for frame in text.split("\n\n")
        if frame.startswith("data: ")
    ]


class RecordingUpstream:
    """Mock upstream that records every request it receives."""

    def __init__(self, handler: Handler) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def payload(self, index: int = -1) -> dict[str, Any]:
        return json.loads(self.requests[index].content)


def mock_client(handler: Handler) -> httpx.AsyncClient:
    """httpx client served by a handler instead of the network."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def origin_not_found(request: httpx.Request) -> httpx.Response:
    return httpx.Response(404, text="not found")


@pytest.fixture
def settings() -> Settings:
    """Provide settings with an upstream key and in-memory storage."""
    return build_settings()


@pytest.fixture
def kv_store():
    """Provide a fresh in-memory key-value store."""
    from lettercast.boundary.kv.memory_store import InMemoryKeyValueStore

    return InMemoryKeyValueStore()


@pytest.fixture
async def db_engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine shared by every session of the test
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    from lettercast.boundary.db.connection import create_tables

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """Provide a session factory bound to the test engine."""
    from lettercast.boundary.db.connection import get_async_session_factory

    return get_async_session_factory(db_engine)


@pytest.fixture
def make_service_cache(kv_store):
    """
    Factory for a ServiceCache wired to mock transports.

    Returns:
        Callable: ``(upstream_handler, origin_handler=None, settings=None) -> ServiceCache``
    """
    from lettercast.api.deps.dependencies import ServiceCache
    from lettercast.boundary.llm.openai_client import OpenAIChatClient
    from lettercast.boundary.origin.letter_source import LetterSource

    def factory(
        upstream_handler: Handler,
        origin_handler: Handler | None = None,
        settings: Settings | None = None,
    ) -> ServiceCache:
        settings = settings or build_settings()
        return ServiceCache(
            settings=settings,
            kv_store=kv_store,
            upstream_client=OpenAIChatClient(settings.upstream, client=mock_client(upstream_handler)),
            letter_source=LetterSource(settings.letter, client=mock_client(origin_handler or origin_not_found)),
        )

    return factory


@pytest.fixture
def make_api_client(make_service_cache):
    """
    Factory for a TestClient over every router, bound to a mock-wired ServiceCache.

    Returns:
        Callable: ``(upstream_handler, origin_handler=None, settings=None) -> (TestClient, ServiceCache)``
    """
    from fastapi import FastAPI
    from fastapi.testclient import TestClient

    from lettercast.api.deps.dependencies import get_service_cache
    from lettercast.api.routers import (
        cache_router,
        chat_router,
        health_router,
        history_router,
        letter_router,
        sessions_router,
        templates_router,
    )

    def factory(
        upstream_handler: Handler,
        origin_handler: Handler | None = None,
        settings: Settings | None = None,
    ):
        cache = make_service_cache(upstream_handler, origin_handler, settings)
        app = FastAPI()
        for router in (
            health_router,
            chat_router,
            letter_router,
            history_router,
            sessions_router,
            templates_router,
            cache_router,
        ):
            app.include_router(router, prefix="/api")
        app.dependency_overrides[get_service_cache] = lambda: cache
        return TestClient(app), cache

    return factory
