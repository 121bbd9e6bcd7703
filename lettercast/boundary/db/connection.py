"""
Database connection management.

Provides the async SQLAlchemy engine, session factory and table
creation for the durable key-value store and audit tables.

Dependencies: sqlalchemy, lettercast.configs
System role: Database connection lifecycle management
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from lettercast.boundary.db.base import Base
from lettercast.configs import get_settings


def get_async_engine(database_url: str | None = None, echo: bool | None = None) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    pool_pre_ping=True verifies connections before use to detect
    stale connections early.

    Args:
        database_url: Override for the configured URL
        echo: Override for the configured SQL echo flag

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    storage = get_settings().storage
    return create_async_engine(
        database_url or storage.database_url,
        echo=storage.echo_sql if echo is None else echo,
        pool_pre_ping=True,
    )


def get_async_session_factory(engine: AsyncEngine | None = None) -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory for database operations.

    Args:
        engine: Engine to bind; a new configured engine when omitted

    Returns:
        async_sessionmaker: Factory with autoflush off and no expiry on commit

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine or get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all registered tables if they do not exist.

    Args:
        engine: Target engine
    """
    # Register models on the metadata
    from lettercast.boundary.db import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

