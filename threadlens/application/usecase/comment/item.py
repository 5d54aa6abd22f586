"""Comment representation shared by use case responses."""

from pydantic import BaseModel

from threadlens.domain.model import Comment


class CommentItem(BaseModel):
    """Comment item in response."""

    comment_id: str
    video_id: str
    comment_parent_id: str | None
    reply_level: int
    author: str
    author_avatar_url: str
    content: str
    likes: int
    reply_count: int
    word_count: int
    published: str
    published_date: int
    is_author_content_creator: bool
    is_hearted: bool
    is_member: bool
    is_donated: bool
    donation_amount: str
    has_timestamp: bool
    has_links: bool
    is_bookmarked: bool
    bookmark_added_date: str
    note: str
    show_replies_default: bool

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentItem":
        return cls.model_validate(comment.model_dump(exclude={"author_channel_id"}))
