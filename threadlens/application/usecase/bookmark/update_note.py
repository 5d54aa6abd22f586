"""Update note use case."""

from pydantic import BaseModel, Field

from threadlens.domain.service import CommentService
from threadlens.domain.value import CommentId


class UpdateNoteRequest(BaseModel):
    """Update note request."""

    comment_id: str
    note: str = Field(max_length=5000)


class UpdateNoteResponse(BaseModel):
    """Update note response."""

    comment_id: str
    note: str


class UpdateNoteUseCase:
    """Use case for attaching a personal note to a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: UpdateNoteRequest) -> UpdateNoteResponse:
        comment = await self.comment_service.add_note(
            CommentId(request.comment_id), request.note
        )
        return UpdateNoteResponse(comment_id=comment.comment_id, note=comment.note)
