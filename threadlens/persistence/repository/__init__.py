"""SQLAlchemy repository implementations."""

from threadlens.persistence.repository.comment import SqlCommentRepository

__all__ = [
    "SqlCommentRepository",
]
