"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: lettercast.configs, lettercast.application, lettercast.boundary
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from lettercast.application.adapters import (
    ChunkProgressStore,
    ConversationMemoryStore,
    ResponseCache,
    SessionLogStore,
)
from lettercast.application.services import AuditService, ChatProxyService, LetterChunkService
from lettercast.boundary.db.connection import get_async_engine, get_async_session_factory
from lettercast.boundary.kv import KeyValueStore, create_kv_store
from lettercast.boundary.llm import OpenAIChatClient
from lettercast.boundary.origin import LetterSource
from lettercast.configs import Settings, get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(
        self,
        settings: Settings | None = None,
        kv_store: KeyValueStore | None = None,
        engine: AsyncEngine | None = None,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        upstream_client: OpenAIChatClient | None = None,
        letter_source: LetterSource | None = None,
    ):
        """
        Args are optional pre-built collaborators; anything omitted is
        created from settings on first use.
        """
        self._settings = settings
        self._kv_store = kv_store
        self._engine = engine
        self._session_factory = session_factory
        self._upstream_client = upstream_client
        self._letter_source = letter_source
        self._response_cache = None
        self._memory_store = None
        self._progress_store = None
        self._session_log = None
        self._letter_chunks = None
        self._audit = None
        self._chat_proxy = None

    @property
    def settings(self) -> Settings:
        """Get cached settings."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def engine(self) -> AsyncEngine | None:
        """Get cached engine; None when nothing needs the database."""
        if self._engine is None and self.settings.storage.uses_database:
            self._engine = get_async_engine(self.settings.storage.database_url)
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession] | None:
        """Get cached session factory."""
        if self._session_factory is None and self.engine is not None:
            self._session_factory = get_async_session_factory(self.engine)
        return self._session_factory

    @property
    def kv_store(self) -> KeyValueStore:
        """Get cached key-value store."""
        if self._kv_store is None:
            self._kv_store = create_kv_store(self.settings.storage, self.session_factory)
        return self._kv_store

    @property
    def upstream_client(self) -> OpenAIChatClient:
        """Get cached upstream client."""
        if self._upstream_client is None:
            self._upstream_client = OpenAIChatClient(self.settings.upstream)
        return self._upstream_client

    @property
    def letter_source(self) -> LetterSource:
        """Get cached origin letter source."""
        if self._letter_source is None:
            self._letter_source = LetterSource(self.settings.letter)
        return self._letter_source

    @property
    def response_cache(self) -> ResponseCache:
        """Get cached response cache."""
        if self._response_cache is None:
            cache_settings = self.settings.cache
            self._response_cache = ResponseCache(
                self.kv_store,
                ttl_hours=cache_settings.ttl_hours,
                enabled=cache_settings.enabled,
            )
        return self._response_cache

    @property
    def memory_store(self) -> ConversationMemoryStore:
        """Get cached conversation memory store."""
        if self._memory_store is None:
            self._memory_store = ConversationMemoryStore(self.kv_store)
        return self._memory_store

    @property
    def progress_store(self) -> ChunkProgressStore:
        """Get cached chunk progress store."""
        if self._progress_store is None:
            self._progress_store = ChunkProgressStore(self.kv_store)
        return self._progress_store

    @property
    def session_log(self) -> SessionLogStore:
        """Get cached session message log."""
        if self._session_log is None:
            self._session_log = SessionLogStore(self.kv_store)
        return self._session_log

    @property
    def letter_chunks(self) -> LetterChunkService:
        """Get cached letter chunk service."""
        if self._letter_chunks is None:
            self._letter_chunks = LetterChunkService(self.kv_store, self.letter_source)
        return self._letter_chunks

    @property
    def audit(self) -> AuditService:
        """Get cached audit service."""
        if self._audit is None:
            enabled = self.settings.storage.audit_enabled
            self._audit = AuditService(self.session_factory if enabled else None, enabled=enabled)
        return self._audit

    @property
    def chat_proxy(self) -> ChatProxyService:
        """Get cached chat proxy orchestrator."""
        if self._chat_proxy is None:
            self._chat_proxy = ChatProxyService(
                client=self.upstream_client,
                upstream_settings=self.settings.upstream,
                response_cache=self.response_cache,
                memory_store=self.memory_store,
                progress_store=self.progress_store,
                letter_chunks=self.letter_chunks,
                audit=self.audit,
            )
        return self._chat_proxy

    async def aclose(self) -> None:
        """Drain background work and release clients, stores and the engine."""
        if self._response_cache is not None:
            await self._response_cache.hit_tasks.drain()
        if self._audit is not None:
            await self._audit.drain()
        if self._upstream_client is not None:
            await self._upstream_client.aclose()
        if self._letter_source is not None:
            await self._letter_source.aclose()
        if self._kv_store is not None:
            await self._kv_store.close()
        if self._engine is not None:
            await self._engine.dispose()

    def clear(self) -> None:
        """Clear all cached instances."""
        self.__init__(settings=self._settings)


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_chat_proxy_service(cache: ServiceCache = Depends(get_service_cache)) -> ChatProxyService:
    """
    Get chat proxy orchestrator.

    Args:
        cache: Service cache (injected via Depends)

    Returns:
        ChatProxyService: Shared orchestrator instance
    """
    return cache.chat_proxy


def get_letter_chunk_service(cache: ServiceCache = Depends(get_service_cache)) -> LetterChunkService:
    """Get letter chunk service."""
    return cache.letter_chunks


def get_memory_store(cache: ServiceCache = Depends(get_service_cache)) -> ConversationMemoryStore:
    """Get conversation memory store."""
    return cache.memory_store


def get_session_log(cache: ServiceCache = Depends(get_service_cache)) -> SessionLogStore:
    """Get session message log."""
    return cache.session_log


def get_response_cache(cache: ServiceCache = Depends(get_service_cache)) -> ResponseCache:
    """Get response cache."""
    return cache.response_cache
