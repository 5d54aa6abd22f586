"""Domain layer DI providers."""

from dishka import Scope, provide

from threadlens.config import SearchSettings
from threadlens.domain.repository import CommentRepository
from threadlens.domain.service import (
    CommentQueryService,
    CommentService,
    TextMatcher,
    TokenWindowMatcher,
)
from threadlens.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with the repository lifecycle.
    One request scope backs one open comment view.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_text_matcher(self, search_settings: SearchSettings) -> TextMatcher:
        """Provide the approximate matcher used by keyword search."""
        return TokenWindowMatcher(
            threshold=search_settings.fuzzy_threshold,
            min_query_length=search_settings.fuzzy_min_query_length,
        )

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)

    @provide
    def get_comment_query_service(
        self, comment_repository: CommentRepository, text_matcher: TextMatcher
    ) -> CommentQueryService:
        """Provide comment query domain service."""
        return CommentQueryService(
            comment_repository=comment_repository, text_matcher=text_matcher
        )
