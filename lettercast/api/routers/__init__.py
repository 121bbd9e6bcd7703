"""API routers."""

from .cache import router as cache_router
from .chat import router as chat_router  # chat/ package
from .health import router as health_router
from .history import router as history_router
from .letter import router as letter_router
from .sessions import router as sessions_router
from .templates import router as templates_router

__all__ = [
    "cache_router",
    "chat_router",
    "health_router",
    "history_router",
    "letter_router",
    "sessions_router",
    "templates_router",
]
