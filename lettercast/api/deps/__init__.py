"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    ServiceCache,
    get_chat_proxy_service,
    get_letter_chunk_service,
    get_memory_store,
    get_response_cache,
    get_service_cache,
    get_session_log,
)

__all__ = [
    "ServiceCache",
    "get_chat_proxy_service",
    "get_letter_chunk_service",
    "get_memory_store",
    "get_response_cache",
    "get_service_cache",
    "get_session_log",
]
