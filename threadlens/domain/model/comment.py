"""Comment entity.

Comments are two-level threads on a video: top-level comments
(reply_level 0) and their direct replies (reply_level >= 1).
"""

from typing import Any, Optional

from pydantic import Field, field_validator, model_validator

from threadlens.domain.model.common import DomainModel
from threadlens.domain.value import CommentId, ContextId

_NUMERIC_FIELDS = ("likes", "reply_count", "reply_level", "published_date")
_TEXT_FIELDS = (
    "author",
    "author_avatar_url",
    "author_channel_id",
    "content",
    "published",
    "donation_amount",
    "bookmark_added_date",
    "note",
)


def count_words(content: str) -> int:
    """Count whitespace separated words in comment content."""
    return len(content.split())


class Comment(DomainModel):
    """Comment entity.

    Derived fields (word_count and the boolean content flags) are set once
    when the record is created and are never recomputed downstream; the
    ranking engine reads them as-is.

    Threading is managed through:
    - reply_level: 0 for top-level comments, >= 1 for replies
    - comment_parent_id: id of the top-level parent (replies only)
    """

    comment_id: CommentId
    video_id: ContextId = ContextId("")
    comment_parent_id: Optional[CommentId] = None
    reply_level: int = Field(default=0, ge=0)

    author: str = ""
    author_avatar_url: str = ""
    author_channel_id: str = ""

    likes: int = Field(default=0, ge=0)
    reply_count: int = Field(default=0, ge=0)

    content: str = ""
    word_count: int = Field(default=0, ge=0)

    published_date: int = 0  # epoch milliseconds
    published: str = ""  # display only

    is_author_content_creator: bool = False
    is_hearted: bool = False
    is_member: bool = False
    is_donated: bool = False
    donation_amount: str = ""
    has_timestamp: bool = False
    has_links: bool = False

    # Bookmark extension, mutated only by bookmark/note operations
    is_bookmarked: bool = False
    bookmark_added_date: str = ""
    note: str = ""

    # Set on parents pulled into search results by a matching reply
    show_replies_default: bool = False

    @model_validator(mode="before")
    @classmethod
    def fill_missing_fields(cls, data: Any) -> Any:
        """Tolerate malformed records and derive word_count once."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for name in _NUMERIC_FIELDS:
            value = data.get(name)
            if value is None:
                data[name] = 0
            elif isinstance(value, (int, float)) and value < 0:
                data[name] = 0
        for name in _TEXT_FIELDS:
            if data.get(name) is None:
                data[name] = ""
        if not data.get("comment_parent_id"):
            data["comment_parent_id"] = None
        word_count = data.get("word_count")
        if word_count is None or (isinstance(word_count, (int, float)) and word_count < 0):
            data["word_count"] = count_words(str(data["content"]))
        return data

    @field_validator(
        "is_author_content_creator",
        "is_hearted",
        "is_member",
        "is_donated",
        "has_timestamp",
        "has_links",
        "is_bookmarked",
        mode="before",
    )
    @classmethod
    def coerce_missing_flag(cls, v: Any) -> bool:
        """Treat missing flags as unset."""
        return bool(v) if v is not None else False

    @property
    def is_top_level(self) -> bool:
        return self.reply_level == 0

    @property
    def is_reply(self) -> bool:
        return self.reply_level > 0
