"""Service orchestrators."""

from .audit_service import AuditService
from .chat_proxy_service import ChatMode, ChatProxyService, PreparedChat
from .letter_chunk_service import LetterChunkService

__all__ = [
    "AuditService",
    "ChatMode",
    "ChatProxyService",
    "LetterChunkService",
    "PreparedChat",
]
