"""SQLAlchemy table definitions for the local comment store.

Comments are stored flat; threads are rebuilt from reply_level and
comment_parent_id. The surrogate integer id preserves insertion order
and breaks ties between equal sort values.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("comment_id", String(255), nullable=False, unique=True),
    Column("video_id", String(64), nullable=False),
    Column("comment_parent_id", String(255), nullable=True),
    Column("reply_level", Integer, nullable=False, server_default="0"),
    Column("author", Text, nullable=False, server_default=""),
    Column("author_avatar_url", Text, nullable=False, server_default=""),
    Column("author_channel_id", String(255), nullable=False, server_default=""),
    Column("likes", Integer, nullable=False, server_default="0"),
    Column("reply_count", Integer, nullable=False, server_default="0"),
    Column("content", Text, nullable=False, server_default=""),
    Column("word_count", Integer, nullable=False, server_default="0"),
    Column("published_date", BigInteger, nullable=False, server_default="0"),
    Column("published", String(255), nullable=False, server_default=""),
    Column("is_author_content_creator", Boolean, nullable=False, default=False),
    Column("is_hearted", Boolean, nullable=False, default=False),
    Column("is_member", Boolean, nullable=False, default=False),
    Column("is_donated", Boolean, nullable=False, default=False),
    Column("donation_amount", String(64), nullable=False, server_default=""),
    Column("has_timestamp", Boolean, nullable=False, default=False),
    Column("has_links", Boolean, nullable=False, default=False),
    Column("is_bookmarked", Boolean, nullable=False, default=False),
    Column("bookmark_added_date", String(64), nullable=False, server_default=""),
    Column("note", Text, nullable=False, server_default=""),
)

# Compound indexes serving the paginated, per-video sorts
Index(
    "idx_comments_video_level_date",
    comments_table.c.video_id,
    comments_table.c.reply_level,
    comments_table.c.published_date,
)
Index(
    "idx_comments_video_level_likes",
    comments_table.c.video_id,
    comments_table.c.reply_level,
    comments_table.c.likes,
)
Index(
    "idx_comments_video_level_replies",
    comments_table.c.video_id,
    comments_table.c.reply_level,
    comments_table.c.reply_count,
)
Index("idx_comments_parent", comments_table.c.comment_parent_id)
Index(
    "idx_comments_video_bookmarked",
    comments_table.c.video_id,
    comments_table.c.is_bookmarked,
)
