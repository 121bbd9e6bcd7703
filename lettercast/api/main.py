"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, lettercast.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lettercast.api.deps.dependencies import get_service_cache
from lettercast.boundary.db.connection import create_tables
from lettercast.observability import configure_logging
from lettercast.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import (
    cache_router,
    chat_router,
    health_router,
    history_router,
    letter_router,
    sessions_router,
    templates_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    cache = get_service_cache()
    configure_logging(cache.settings.log_level)
    logger = logging.getLogger(__name__)

    # Startup
    if cache.settings.storage.uses_database:
        await create_tables(cache.engine)
        logger.info("Database tables ready")
    logger.info(
        "Lettercast started",
        extra={
            "environment": cache.settings.environment,
            "kv_backend": cache.settings.storage.kv_backend,
            "upstream_configured": cache.settings.upstream.is_configured,
        },
    )

    yield

    # Shutdown
    await cache.aclose()
    cache.clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Lettercast",
        description="Progressive narrative streaming proxy for parent-voiced chat and letters",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api prefix
    app.include_router(health_router, prefix="/api")
    app.include_router(chat_router, prefix="/api")
    app.include_router(letter_router, prefix="/api")
    app.include_router(history_router, prefix="/api")
    app.include_router(sessions_router, prefix="/api")
    app.include_router(templates_router, prefix="/api")
    app.include_router(cache_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "lettercast.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
