"""Domain model entities for threadlens."""

from threadlens.domain.model.comment import Comment, count_words
from threadlens.domain.model.query import CommentPage, CommentQuery

__all__ = [
    "Comment",
    "CommentPage",
    "CommentQuery",
    "count_words",
]
