"""Application layer DI providers."""

from dishka import Scope, provide

from threadlens.application.session import CommentViewSession
from threadlens.application.usecase.bookmark import (
    GetBookmarksUseCase,
    ToggleBookmarkUseCase,
    UpdateNoteUseCase,
)
from threadlens.application.usecase.comment import GetCommentPageUseCase
from threadlens.application.usecase.ingest import IngestCommentsUseCase
from threadlens.config import Settings
from threadlens.domain.service import CommentQueryService, CommentService
from threadlens.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_comment_page_use_case(
        self, comment_query_service: CommentQueryService, settings: Settings
    ) -> GetCommentPageUseCase:
        """Provide get comment page use case."""
        return GetCommentPageUseCase(
            comment_query_service=comment_query_service, settings=settings
        )

    @provide(scope=Scope.REQUEST)
    def get_ingest_comments_use_case(
        self, comment_service: CommentService
    ) -> IngestCommentsUseCase:
        """Provide ingest comments use case."""
        return IngestCommentsUseCase(comment_service=comment_service)

    # Bookmark use cases
    @provide(scope=Scope.REQUEST)
    def get_toggle_bookmark_use_case(
        self, comment_service: CommentService
    ) -> ToggleBookmarkUseCase:
        """Provide toggle bookmark use case."""
        return ToggleBookmarkUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_update_note_use_case(
        self, comment_service: CommentService
    ) -> UpdateNoteUseCase:
        """Provide update note use case."""
        return UpdateNoteUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_bookmarks_use_case(
        self, comment_service: CommentService
    ) -> GetBookmarksUseCase:
        """Provide get bookmarks use case."""
        return GetBookmarksUseCase(comment_service=comment_service)

    # View session
    @provide(scope=Scope.REQUEST)
    def get_comment_view_session(
        self,
        comment_query_service: CommentQueryService,
        comment_service: CommentService,
        settings: Settings,
    ) -> CommentViewSession:
        """Provide the live view session for this scope."""
        return CommentViewSession(
            comment_query_service=comment_query_service,
            comment_service=comment_service,
            settings=settings,
        )
