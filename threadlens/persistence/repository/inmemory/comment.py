"""In-memory comment repository for testing."""

from typing import Optional

from threadlens.domain.model.comment import Comment
from threadlens.domain.repository.comment import CommentRepository
from threadlens.domain.service.filtering import apply_basic_filters
from threadlens.domain.service.sorting import order_comments
from threadlens.domain.value import (
    BasicFilters,
    CommentId,
    ContextId,
    SortKey,
    SortOrder,
)


def _paginate(comments: list[Comment], page: int, page_size: int) -> list[Comment]:
    offset = page * page_size
    return comments[offset : offset + page_size]


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    def _top_level(self, context_id: ContextId) -> list[Comment]:
        return [
            c
            for c in self._comments.values()
            if c.video_id == context_id and c.is_top_level
        ]

    def _filtered_units(
        self, context_id: ContextId, basic_filters: BasicFilters
    ) -> list[Comment]:
        comments = apply_basic_filters(
            [c for c in self._comments.values() if c.video_id == context_id],
            basic_filters,
        )
        parents = {c.comment_id for c in comments if c.is_top_level}
        return [
            c for c in comments if c.is_top_level or c.comment_parent_id not in parents
        ]

    async def get_comment_count(
        self,
        context_id: ContextId,
        basic_filters: Optional[BasicFilters] = None,
    ) -> int:
        """Count page units for a context."""
        if basic_filters is not None and basic_filters.is_active:
            return len(self._filtered_units(context_id, basic_filters))
        return len(self._top_level(context_id))

    async def get_comments_by_page(
        self, context_id: ContextId, page: int, page_size: int
    ) -> list[Comment]:
        """Get a page of top-level comments, newest first."""
        comments = order_comments(self._top_level(context_id), SortKey.DATE)
        return _paginate(comments, page, page_size)

    async def get_comment_replies(self, parent_ids: list[CommentId]) -> list[Comment]:
        """Get direct replies of the given parents."""
        wanted = set(parent_ids)
        replies = [
            c
            for c in self._comments.values()
            if c.is_reply and c.comment_parent_id in wanted
        ]
        # Oldest first, like a thread
        return order_comments(replies, SortKey.DATE, SortOrder.ASC)

    async def get_filtered_comments(
        self,
        context_id: ContextId,
        basic_filters: BasicFilters,
        page: int,
        page_size: int,
    ) -> list[Comment]:
        """Get a page of flag-filtered units, newest first."""
        comments = self._filtered_units(context_id, basic_filters)
        comments = order_comments(comments, SortKey.DATE)
        return _paginate(comments, page, page_size)

    async def get_sorted_comments(
        self,
        context_id: ContextId,
        sort_key: SortKey,
        sort_order: SortOrder,
        page: int,
        page_size: int,
    ) -> list[Comment]:
        """Get a page of top-level comments in the requested order."""
        comments = order_comments(self._top_level(context_id), sort_key, sort_order)
        return _paginate(comments, page, page_size)

    async def get_comments(self, context_id: ContextId) -> list[Comment]:
        """Get every comment of a context in insertion order."""
        return [c for c in self._comments.values() if c.video_id == context_id]

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def save_many(self, comments: list[Comment]) -> int:
        """Insert comments whose ids are not stored yet."""
        inserted = 0
        for comment in comments:
            if comment.comment_id in self._comments:
                continue
            self._comments[comment.comment_id] = comment
            inserted += 1
        return inserted

    async def update_bookmark(
        self,
        comment_id: CommentId,
        is_bookmarked: bool,
        bookmark_added_date: str,
    ) -> Optional[Comment]:
        """Set bookmark fields (comments are immutable, so replace the record)."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        updated = comment.model_copy(
            update={
                "is_bookmarked": is_bookmarked,
                "bookmark_added_date": bookmark_added_date,
            }
        )
        self._comments[comment_id] = updated
        return updated

    async def update_note(self, comment_id: CommentId, note: str) -> Optional[Comment]:
        """Set the note of a comment."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        updated = comment.model_copy(update={"note": note})
        self._comments[comment_id] = updated
        return updated

    async def get_bookmarked_comments(
        self, context_id: Optional[ContextId] = None
    ) -> list[Comment]:
        """Get bookmarked comments, most recently bookmarked first."""
        comments = [
            c
            for c in self._comments.values()
            if c.is_bookmarked and (context_id is None or c.video_id == context_id)
        ]
        comments.sort(key=lambda c: c.bookmark_added_date, reverse=True)
        return comments

    async def clear_context(self, context_id: ContextId) -> int:
        """Delete every comment of a context."""
        doomed = [cid for cid, c in self._comments.items() if c.video_id == context_id]
        for comment_id in doomed:
            del self._comments[comment_id]
        return len(doomed)
