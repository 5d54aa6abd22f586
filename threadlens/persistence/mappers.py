"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict

from threadlens.domain.model import Comment
from threadlens.domain.value import CommentId, ContextId

# Search-only presentation flag, never persisted
_TRANSIENT_FIELDS = {"show_replies_default"}


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    data = {k: v for k, v in row.items() if k != "id"}
    data["comment_id"] = CommentId(row["comment_id"])
    data["video_id"] = ContextId(row["video_id"])
    if row.get("comment_parent_id"):
        data["comment_parent_id"] = CommentId(row["comment_parent_id"])
    return Comment(**data)


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return comment.model_dump(exclude=_TRANSIENT_FIELDS)
