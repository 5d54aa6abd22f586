"""Comment use cases."""

from .get_comment_page import (
    GetCommentPageRequest,
    GetCommentPageResponse,
    GetCommentPageUseCase,
)
from .item import CommentItem

__all__ = [
    "CommentItem",
    "GetCommentPageRequest",
    "GetCommentPageResponse",
    "GetCommentPageUseCase",
]
