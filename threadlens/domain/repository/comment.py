"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from threadlens.domain.model.comment import Comment
from threadlens.domain.value import (
    BasicFilters,
    CommentId,
    ContextId,
    SortKey,
    SortOrder,
)


class CommentRepository(ABC):
    """Repository for Comment records (the persisted local store).

    Records are indexed by context (video) id. Page methods return
    top-level comments and use zero-based page numbers; replies are
    fetched separately through get_comment_replies. The flag-filtered
    page also returns flagged replies whose parent lacks the flags.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def get_comment_count(
        self,
        context_id: ContextId,
        basic_filters: Optional[BasicFilters] = None,
    ) -> int:
        """Count the page units of a context.

        Args:
            context_id: The video the comments belong to
            basic_filters: Optional flag filters the count must honour

        Returns:
            Number of top-level comments, or with active flags the number
            of units get_filtered_comments pages through
        """
        pass

    @abstractmethod
    async def get_comments_by_page(
        self, context_id: ContextId, page: int, page_size: int
    ) -> List[Comment]:
        """Get a page of top-level comments, newest first.

        Args:
            context_id: The video the comments belong to
            page: Zero-based page number
            page_size: Number of comments per page

        Returns:
            Top-level comments on that page
        """
        pass

    @abstractmethod
    async def get_comment_replies(self, parent_ids: List[CommentId]) -> List[Comment]:
        """Get the direct replies of several top-level comments.

        Args:
            parent_ids: Ids of the parent comments

        Returns:
            Replies in store order (oldest first)
        """
        pass

    @abstractmethod
    async def get_filtered_comments(
        self,
        context_id: ContextId,
        basic_filters: BasicFilters,
        page: int,
        page_size: int,
    ) -> List[Comment]:
        """Get a page of comments matching flag filters, newest first.

        Args:
            context_id: The video the comments belong to
            basic_filters: Flags a comment must carry
            page: Zero-based page number
            page_size: Number of comments per page

        Returns:
            Matching top-level comments, and matching replies whose parent
            does not match, on that page
        """
        pass

    @abstractmethod
    async def get_sorted_comments(
        self,
        context_id: ContextId,
        sort_key: SortKey,
        sort_order: SortOrder,
        page: int,
        page_size: int,
    ) -> List[Comment]:
        """Get a page of top-level comments in an indexed order.

        Only the single-field keys (date, likes, replies, length, author)
        are supported; composite keys need whole-collection statistics and
        are ranked in memory instead.

        Args:
            context_id: The video the comments belong to
            sort_key: Single-field sort key
            sort_order: Sort direction
            page: Zero-based page number
            page_size: Number of comments per page

        Returns:
            Top-level comments on that page
        """
        pass

    @abstractmethod
    async def get_comments(self, context_id: ContextId) -> List[Comment]:
        """Get every comment (top-level and replies) for a context.

        Args:
            context_id: The video the comments belong to

        Returns:
            All comments in insertion order
        """
        pass

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def save_many(self, comments: List[Comment]) -> int:
        """Insert new comments, skipping ids already stored.

        Args:
            comments: Comments to add

        Returns:
            Number of comments actually inserted
        """
        pass

    @abstractmethod
    async def update_bookmark(
        self,
        comment_id: CommentId,
        is_bookmarked: bool,
        bookmark_added_date: str,
    ) -> Optional[Comment]:
        """Set the bookmark fields of a comment.

        Returns:
            The updated comment, or None if it does not exist
        """
        pass

    @abstractmethod
    async def update_note(self, comment_id: CommentId, note: str) -> Optional[Comment]:
        """Set the user note of a comment.

        Returns:
            The updated comment, or None if it does not exist
        """
        pass

    @abstractmethod
    async def get_bookmarked_comments(
        self, context_id: Optional[ContextId] = None
    ) -> List[Comment]:
        """Get bookmarked comments, most recently bookmarked first.

        Args:
            context_id: Restrict to one video; None returns all videos
        """
        pass

    @abstractmethod
    async def clear_context(self, context_id: ContextId) -> int:
        """Delete every comment of a context.

        Returns:
            Number of comments deleted
        """
        pass
