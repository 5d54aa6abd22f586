"""Get bookmarks use case."""

from pydantic import BaseModel

from threadlens.application.usecase.comment.item import CommentItem
from threadlens.domain.service import CommentService
from threadlens.domain.value import ContextId


class GetBookmarksRequest(BaseModel):
    """Get bookmarks request."""

    context_id: str | None = None  # None lists bookmarks of every video


class GetBookmarksResponse(BaseModel):
    """Get bookmarks response."""

    comments: list[CommentItem]
    total: int


class GetBookmarksUseCase:
    """Use case for listing bookmarked comments, newest bookmark first."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetBookmarksRequest) -> GetBookmarksResponse:
        context_id = ContextId(request.context_id) if request.context_id else None
        comments = await self.comment_service.get_bookmarked_comments(context_id)
        items = [CommentItem.from_comment(c) for c in comments]
        return GetBookmarksResponse(comments=items, total=len(items))
