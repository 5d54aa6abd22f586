"""Get comment page use case."""

from pydantic import BaseModel, Field

from threadlens.application.usecase.base import BaseUseCase
from threadlens.application.usecase.comment.item import CommentItem
from threadlens.config import Settings
from threadlens.domain.model import CommentQuery
from threadlens.domain.service import CommentQueryService
from threadlens.domain.value import DEFAULT_FILTER_STATE, ContextId, FilterState


class GetCommentPageRequest(BaseModel):
    """Get comment page request."""

    context_id: str
    filters: FilterState = DEFAULT_FILTER_STATE
    sort_key: str | None = "date"
    sort_order: str = "desc"
    search: str = ""
    page: int = Field(default=0, ge=0)
    page_size: int | None = Field(default=None, gt=0)  # None uses the configured size


class GetCommentPageResponse(BaseModel):
    """Get comment page response."""

    context_id: str
    comments: list[CommentItem]
    has_more: bool
    total_count: int
    page: int
    page_size: int


class GetCommentPageUseCase(BaseUseCase):
    """Use case for fetching one ranked, thread-consistent page of comments."""

    def __init__(
        self, comment_query_service: CommentQueryService, settings: Settings
    ) -> None:
        """Initialize get comment page use case.

        Args:
            comment_query_service: Query and pagination domain service
            settings: Application settings (default page size)
        """
        self.comment_query_service = comment_query_service
        self.settings = settings

    async def execute(self, request: GetCommentPageRequest) -> GetCommentPageResponse:
        """Execute get comment page flow.

        Store failures come back as an empty page rather than an error.
        """
        page_size = request.page_size or self.settings.pagination.page_size
        query_fields = {
            "filters": request.filters,
            "sort_order": request.sort_order,
            "search": request.search,
        }
        # Only an explicit sort key reorders search results
        if "sort_key" in request.model_fields_set:
            query_fields["sort_key"] = request.sort_key
        query = CommentQuery(**query_fields)

        result = await self.comment_query_service.get_page(
            ContextId(request.context_id), query, request.page, page_size
        )

        return GetCommentPageResponse(
            context_id=request.context_id,
            comments=[CommentItem.from_comment(c) for c in result.comments],
            has_more=result.has_more,
            total_count=result.total_count,
            page=result.page,
            page_size=result.page_size,
        )
