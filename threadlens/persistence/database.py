"""Database connection and session management.

Provides async database engine and session factory for the local store.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from threadlens.config import Settings
from threadlens.persistence.tables import metadata
from threadlens.util.error import ConfigurationError


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine

    Raises:
        ConfigurationError: If the URL does not name an async driver
    """
    url = settings.database.url
    if "+" not in url.split("://", 1)[0]:
        raise ConfigurationError(
            f"Database URL must name an async driver, e.g. sqlite+aiosqlite: {url!r}"
        )
    if url.startswith("sqlite"):
        # SQLite picks its own pool; sizing arguments do not apply
        return create_async_engine(url, echo=settings.debug)
    return create_async_engine(
        url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,  # Manual flushing for better control
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create missing tables and indexes.

    Args:
        engine: Database engine
    """
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
