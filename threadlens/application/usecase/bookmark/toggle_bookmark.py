"""Toggle bookmark use case."""

from pydantic import BaseModel

from threadlens.domain.service import CommentService
from threadlens.domain.value import CommentId


class ToggleBookmarkRequest(BaseModel):
    """Toggle bookmark request."""

    comment_id: str


class ToggleBookmarkResponse(BaseModel):
    """Toggle bookmark response."""

    comment_id: str
    is_bookmarked: bool
    bookmark_added_date: str


class ToggleBookmarkUseCase:
    """Use case for bookmarking or un-bookmarking a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize toggle bookmark use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: ToggleBookmarkRequest) -> ToggleBookmarkResponse:
        """Execute toggle bookmark flow.

        Raises:
            NotFoundError: If the comment is not stored
        """
        comment = await self.comment_service.toggle_bookmark(
            CommentId(request.comment_id)
        )
        return ToggleBookmarkResponse(
            comment_id=comment.comment_id,
            is_bookmarked=comment.is_bookmarked,
            bookmark_added_date=comment.bookmark_added_date,
        )
