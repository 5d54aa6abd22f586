"""SQLAlchemy implementation of Comment repository."""

from typing import Any, List, Optional

import logfire
from sqlalchemy import asc, delete, desc, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from threadlens.domain.model import Comment
from threadlens.domain.repository import CommentRepository
from threadlens.domain.value import (
    BasicFilters,
    CommentId,
    ContextId,
    SortKey,
    SortOrder,
)
from threadlens.persistence.mappers import comment_to_dict, row_to_comment
from threadlens.persistence.tables import comments_table

_SORT_COLUMNS: dict[SortKey, Any] = {
    SortKey.DATE: comments_table.c.published_date,
    SortKey.LIKES: comments_table.c.likes,
    SortKey.REPLIES: comments_table.c.reply_count,
    SortKey.LENGTH: func.length(comments_table.c.content),
    SortKey.AUTHOR: func.lower(comments_table.c.author),
}

_FLAG_COLUMNS = {
    "creator": comments_table.c.is_author_content_creator,
    "has_links": comments_table.c.has_links,
    "hearted": comments_table.c.is_hearted,
    "member": comments_table.c.is_member,
    "donated": comments_table.c.is_donated,
    "has_timestamp": comments_table.c.has_timestamp,
}


def _top_level(context_id: ContextId):
    return select(comments_table).where(
        comments_table.c.video_id == context_id,
        comments_table.c.reply_level == 0,
    )


def _with_flags(stmt, basic_filters: Optional[BasicFilters]):
    if basic_filters is None:
        return stmt
    for name, column in _FLAG_COLUMNS.items():
        if getattr(basic_filters, name):
            stmt = stmt.where(column.is_(True))
    return stmt


def _filtered_units(context_id: ContextId, basic_filters: BasicFilters):
    """Comments carrying the flags, minus replies whose parent also carries them."""
    passing_parents = _with_flags(
        select(comments_table.c.comment_id).where(
            comments_table.c.video_id == context_id,
            comments_table.c.reply_level == 0,
        ),
        basic_filters,
    )
    stmt = select(comments_table).where(
        comments_table.c.video_id == context_id,
        or_(
            comments_table.c.reply_level == 0,
            comments_table.c.comment_parent_id.is_(None),
            comments_table.c.comment_parent_id.not_in(passing_parents),
        ),
    )
    return _with_flags(stmt, basic_filters)


class SqlCommentRepository(CommentRepository):
    """SQLAlchemy implementation of CommentRepository.

    Each call runs in its own short-lived session, so overlapping queries
    from the view session never share a connection.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self.session_factory = session_factory

    async def _fetch(self, stmt) -> List[Comment]:
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def get_comment_count(
        self,
        context_id: ContextId,
        basic_filters: Optional[BasicFilters] = None,
    ) -> int:
        """Count page units for a context.

        Without flags these are the top-level comments. With flags they are
        the comments get_filtered_comments pages through.
        """
        if basic_filters is not None and basic_filters.is_active:
            units = _filtered_units(context_id, basic_filters).subquery()
            stmt = select(func.count()).select_from(units)
        else:
            stmt = select(func.count()).select_from(comments_table).where(
                comments_table.c.video_id == context_id,
                comments_table.c.reply_level == 0,
            )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return result.scalar() or 0

    async def get_comments_by_page(
        self, context_id: ContextId, page: int, page_size: int
    ) -> List[Comment]:
        """Get a page of top-level comments, newest first."""
        return await self.get_sorted_comments(
            context_id, SortKey.DATE, SortOrder.DESC, page, page_size
        )

    async def get_comment_replies(self, parent_ids: List[CommentId]) -> List[Comment]:
        """Get direct replies of the given parents, oldest first."""
        if not parent_ids:
            return []
        stmt = (
            select(comments_table)
            .where(comments_table.c.comment_parent_id.in_(parent_ids))
            .where(comments_table.c.reply_level > 0)
            .order_by(comments_table.c.published_date, comments_table.c.id)
        )
        return await self._fetch(stmt)

    async def get_filtered_comments(
        self,
        context_id: ContextId,
        basic_filters: BasicFilters,
        page: int,
        page_size: int,
    ) -> List[Comment]:
        """Get a page of flag-filtered units, newest first.

        A reply carrying the flags is its own unit when its parent does not.
        """
        with logfire.span(
            "comment_repository.get_filtered_comments",
            context_id=context_id,
            page=page,
            page_size=page_size,
        ):
            stmt = (
                _filtered_units(context_id, basic_filters)
                .order_by(
                    desc(comments_table.c.published_date), comments_table.c.id
                )
                .limit(page_size)
                .offset(page * page_size)
            )
            return await self._fetch(stmt)

    async def get_sorted_comments(
        self,
        context_id: ContextId,
        sort_key: SortKey,
        sort_order: SortOrder,
        page: int,
        page_size: int,
    ) -> List[Comment]:
        """Get a page of top-level comments in an indexed order."""
        with logfire.span(
            "comment_repository.get_sorted_comments",
            context_id=context_id,
            sort_key=sort_key.value,
            sort_order=sort_order.value,
            page=page,
        ):
            column = _SORT_COLUMNS.get(sort_key)
            if column is None:
                logfire.warn(
                    "Sort key is not indexed, using date", sort_key=sort_key.value
                )
                column = _SORT_COLUMNS[SortKey.DATE]
            direction = desc if sort_order is SortOrder.DESC else asc
            stmt = (
                _top_level(context_id)
                # Insertion order breaks ties in both directions
                .order_by(direction(column), comments_table.c.id)
                .limit(page_size)
                .offset(page * page_size)
            )
            return await self._fetch(stmt)

    async def get_comments(self, context_id: ContextId) -> List[Comment]:
        """Get every comment of a context in insertion order."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.video_id == context_id)
            .order_by(comments_table.c.id)
        )
        return await self._fetch(stmt)

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.comment_id == comment_id)
        comments = await self._fetch(stmt)
        return comments[0] if comments else None

    async def save_many(self, comments: List[Comment]) -> int:
        """Insert comments whose ids are not stored yet."""
        if not comments:
            return 0
        async with self.session_factory() as session:
            ids = [c.comment_id for c in comments]
            result = await session.execute(
                select(comments_table.c.comment_id).where(
                    comments_table.c.comment_id.in_(ids)
                )
            )
            seen = {row.comment_id for row in result.fetchall()}
            rows = []
            for comment in comments:
                if comment.comment_id in seen:
                    continue
                seen.add(comment.comment_id)
                rows.append(comment_to_dict(comment))
            if rows:
                await session.execute(comments_table.insert(), rows)
                await session.commit()
            logfire.debug(
                "Comments saved", inserted=len(rows), skipped=len(comments) - len(rows)
            )
            return len(rows)

    async def _update(self, comment_id: CommentId, **values: Any) -> Optional[Comment]:
        async with self.session_factory() as session:
            stmt = (
                update(comments_table)
                .where(comments_table.c.comment_id == comment_id)
                .values(**values)
                .returning(comments_table)
            )
            result = await session.execute(stmt)
            row = result.fetchone()
            await session.commit()
            return row_to_comment(row._asdict()) if row else None

    async def update_bookmark(
        self,
        comment_id: CommentId,
        is_bookmarked: bool,
        bookmark_added_date: str,
    ) -> Optional[Comment]:
        """Set the bookmark fields of a comment."""
        return await self._update(
            comment_id,
            is_bookmarked=is_bookmarked,
            bookmark_added_date=bookmark_added_date,
        )

    async def update_note(self, comment_id: CommentId, note: str) -> Optional[Comment]:
        """Set the note of a comment."""
        return await self._update(comment_id, note=note)

    async def get_bookmarked_comments(
        self, context_id: Optional[ContextId] = None
    ) -> List[Comment]:
        """Get bookmarked comments, most recently bookmarked first."""
        stmt = select(comments_table).where(comments_table.c.is_bookmarked.is_(True))
        if context_id is not None:
            stmt = stmt.where(comments_table.c.video_id == context_id)
        stmt = stmt.order_by(desc(comments_table.c.bookmark_added_date))
        return await self._fetch(stmt)

    async def clear_context(self, context_id: ContextId) -> int:
        """Delete every comment of a context."""
        async with self.session_factory() as session:
            result = await session.execute(
                delete(comments_table).where(comments_table.c.video_id == context_id)
            )
            await session.commit()
            return result.rowcount or 0
