"""Mock persistence providers for testing."""

from dishka import Scope, provide

from threadlens.domain.repository import CommentRepository
from threadlens.persistence.repository.inmemory import InMemoryCommentRepository
from threadlens.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses REQUEST scope to ensure test isolation - each test gets fresh repositories.
    """

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository()
