"""Comment domain service."""

from datetime import datetime, timezone
from typing import Iterable, List, Optional

import logfire

from threadlens.domain.error import NotFoundError, ValidationError
from threadlens.domain.model.comment import Comment
from threadlens.domain.repository import CommentRepository
from threadlens.domain.value import CommentId, ContextId

from .base import Service


class CommentService(Service):
    """Domain service for storing comments and their bookmark extension."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def save_comments(
        self, context_id: ContextId, comments: Iterable[Comment]
    ) -> int:
        """Persist a batch of comments for a context.

        Comments belonging to another context and ids already stored are
        skipped; the first occurrence of a repeated id wins.

        Args:
            context_id: Video the batch was fetched for
            comments: Comments to store

        Returns:
            Number of comments inserted

        Raises:
            ValidationError: If context_id is empty
        """
        if not context_id:
            raise ValidationError("A context id is required to store comments")
        with logfire.span("comment_service.save_comments", context_id=context_id):
            batch: List[Comment] = []
            foreign = 0
            for comment in comments:
                if comment.video_id != context_id:
                    foreign += 1
                    continue
                batch.append(comment)
            if foreign:
                logfire.warn(
                    "Dropped comments from another context",
                    context_id=context_id,
                    dropped=foreign,
                )

            inserted = await self.comment_repository.save_many(batch)
            logfire.info(
                "Comments ingested",
                context_id=context_id,
                received=len(batch),
                inserted=inserted,
            )
            return inserted

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: If no such comment is stored
        """
        comment = await self.comment_repository.find_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", comment_id)
        return comment

    async def toggle_bookmark(
        self, comment_id: CommentId, now: Optional[datetime] = None
    ) -> Comment:
        """Bookmark a comment, or clear an existing bookmark.

        Args:
            comment_id: Comment to toggle
            now: Bookmark time; defaults to the current UTC time

        Returns:
            Updated comment

        Raises:
            NotFoundError: If no such comment is stored
        """
        with logfire.span("comment_service.toggle_bookmark", comment_id=comment_id):
            comment = await self.get_comment(comment_id)
            if comment.is_bookmarked:
                updated = await self.comment_repository.update_bookmark(
                    comment_id, False, ""
                )
            else:
                added = (now or datetime.now(timezone.utc)).isoformat()
                updated = await self.comment_repository.update_bookmark(
                    comment_id, True, added
                )
            if updated is None:
                raise NotFoundError("Comment", comment_id)
            logfire.info(
                "Bookmark toggled",
                comment_id=comment_id,
                is_bookmarked=updated.is_bookmarked,
            )
            return updated

    async def add_note(self, comment_id: CommentId, note: str) -> Comment:
        """Attach a free-text note to a comment, replacing any previous note.

        Raises:
            NotFoundError: If no such comment is stored
        """
        with logfire.span("comment_service.add_note", comment_id=comment_id):
            updated = await self.comment_repository.update_note(comment_id, note.strip())
            if updated is None:
                logfire.warn("Note target not found", comment_id=comment_id)
                raise NotFoundError("Comment", comment_id)
            return updated

    async def get_bookmarked_comments(
        self, context_id: Optional[ContextId] = None
    ) -> List[Comment]:
        """Get bookmarked comments, most recently bookmarked first."""
        return await self.comment_repository.get_bookmarked_comments(context_id)

    async def clear_context(self, context_id: ContextId) -> int:
        """Remove every stored comment of a context.

        Returns:
            Number of comments deleted
        """
        with logfire.span("comment_service.clear_context", context_id=context_id):
            deleted = await self.comment_repository.clear_context(context_id)
            logfire.info("Context cleared", context_id=context_id, deleted=deleted)
            return deleted
