"""Test configuration and fixtures."""

import os

from threadlens.domain.model import Comment
from threadlens.domain.value import CommentId, ContextId

# Test settings, read by Settings() inside the DI container
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE__URL", "sqlite+aiosqlite://")
os.environ.setdefault("PAGINATION__PAGE_SIZE", "10")
os.environ.setdefault("PAGINATION__DEBOUNCE_MS", "20")

VIDEO_ID = ContextId("video-1")


def make_comment(
    comment_id: str,
    content: str = "",
    *,
    video_id: str = VIDEO_ID,
    parent_id: str | None = None,
    **fields,
) -> Comment:
    """Helper function to build test comments.

    A parent_id makes the comment a first-level reply.

    Args:
        comment_id: Comment ID
        content: Comment text
        video_id: Context the comment belongs to
        parent_id: Top-level parent for replies
        **fields: Any other Comment field

    Returns:
        Comment record
    """
    if parent_id is not None:
        fields.setdefault("reply_level", 1)
    return Comment(
        comment_id=CommentId(comment_id),
        video_id=ContextId(video_id),
        comment_parent_id=CommentId(parent_id) if parent_id else None,
        content=content,
        **fields,
    )
