"""Ingest comments use case."""

from typing import Any

from pydantic import BaseModel

from threadlens.adapter.ingest import payloads_to_comments
from threadlens.application.usecase.base import BaseUseCase
from threadlens.domain.service import CommentService
from threadlens.domain.value import ContextId


class IngestCommentsRequest(BaseModel):
    """Ingest comments request."""

    context_id: str
    payloads: list[dict[str, Any]]
    replace: bool = False  # Clear the stored context before saving


class IngestCommentsResponse(BaseModel):
    """Ingest comments response."""

    context_id: str
    received: int
    inserted: int
    cleared: int


class IngestCommentsUseCase(BaseUseCase):
    """Use case for storing a freshly scraped batch of comment payloads."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize ingest comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: IngestCommentsRequest) -> IngestCommentsResponse:
        """Execute ingest flow.

        Payloads without a comment id are skipped; repeated ids keep their
        first occurrence.
        """
        context_id = ContextId(request.context_id)
        comments = payloads_to_comments(request.payloads, context_id)

        cleared = 0
        if request.replace:
            cleared = await self.comment_service.clear_context(context_id)

        inserted = await self.comment_service.save_comments(context_id, comments)
        return IngestCommentsResponse(
            context_id=request.context_id,
            received=len(request.payloads),
            inserted=inserted,
            cleared=cleared,
        )
