"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from threadlens.config import Settings
from threadlens.domain.repository import CommentRepository
from threadlens.persistence.database import (
    create_engine,
    create_schema,
    create_session_factory,
)
from threadlens.persistence.repository import SqlCommentRepository
from threadlens.util.di.base import ProviderBase
from threadlens.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using SQLAlchemy."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine with the schema in place.

        The engine is disposed when the container closes.
        """
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        if settings.environment != "test":
            instrument_sqlalchemy(engine)
        await create_schema(engine)
        logfire.info("Comment store ready", url=engine.url.render_as_string())
        try:
            yield engine
        finally:
            await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> CommentRepository:
        """Provide Comment repository.

        Each repository call opens its own session, so overlapping view
        queries never share a connection.
        """
        return SqlCommentRepository(session_factory)
