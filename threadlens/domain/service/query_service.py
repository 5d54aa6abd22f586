"""Comment query and pagination service.

Pages are made of units: top-level comments, plus replies whose parent
was filtered out or is missing. Each top-level unit is followed by its
direct replies that pass the active filters, oldest first, so a page
never splits a thread.
"""

from typing import List, Optional

import logfire

from threadlens.domain.model import Comment, CommentPage, CommentQuery
from threadlens.domain.repository import CommentRepository
from threadlens.domain.service.filtering import apply_filters
from threadlens.domain.service.search import search_comments
from threadlens.domain.service.sorting import order_comments
from threadlens.domain.service.text_matcher import TextMatcher
from threadlens.domain.value import INDEXED_SORT_KEYS, CommentId, ContextId, SortKey, SortOrder

from .base import Service


def _page_units(ranked: List[Comment], filtered: List[Comment]) -> List[Comment]:
    """Keep top-level comments and replies whose parent did not pass the filters."""
    top_level = {c.comment_id for c in filtered if c.is_top_level}
    return [
        c
        for c in ranked
        if c.is_top_level or c.comment_parent_id not in top_level
    ]


def _attach_replies(units: List[Comment], replies: List[Comment]) -> List[Comment]:
    by_parent: dict[CommentId, List[Comment]] = {}
    for reply in replies:
        if reply.comment_parent_id is not None:
            by_parent.setdefault(reply.comment_parent_id, []).append(reply)
    comments: List[Comment] = []
    for unit in units:
        comments.append(unit)
        if unit.is_top_level:
            comments.extend(by_parent.get(unit.comment_id, []))
    return comments


class CommentQueryService(Service):
    """Domain service that turns a CommentQuery into thread-consistent pages."""

    def __init__(
        self, comment_repository: CommentRepository, text_matcher: TextMatcher
    ) -> None:
        """Initialize comment query service.

        Args:
            comment_repository: Comment repository
            text_matcher: Approximate matcher used by keyword search
        """
        self.comment_repository = comment_repository
        self.text_matcher = text_matcher

    @staticmethod
    def is_store_served(query: CommentQuery) -> bool:
        """Whether the store's indexed page methods can answer the query."""
        filters = query.filters
        if query.keyword or filters.has_range_predicates:
            return False
        if not filters.has_flag_predicates:
            return query.sort_key is None or query.sort_key in INDEXED_SORT_KEYS
        return query.sort_key is SortKey.DATE and query.sort_order is SortOrder.DESC

    async def rank(
        self, context_id: ContextId, query: CommentQuery
    ) -> Optional[List[Comment]]:
        """Rank the page units of a context.

        Returns:
            Ordered page units, or None when the store serves the query
            directly page by page
        """
        if self.is_store_served(query):
            return None

        with logfire.span(
            "comment_query_service.rank",
            context_id=context_id,
            sort_key=query.sort_key.value if query.sort_key else None,
            has_keyword=bool(query.keyword),
        ):
            collection = await self.comment_repository.get_comments(context_id)
            filtered = apply_filters(collection, query.filters)
            ranked = filtered
            if query.keyword:
                ranked = search_comments(filtered, query.keyword, self.text_matcher)
            units = _page_units(ranked, filtered)
            sort_key = query.result_sort_key
            if sort_key is not None:
                units = order_comments(units, sort_key, query.sort_order)
            logfire.debug(
                "Comments ranked",
                context_id=context_id,
                collection=len(collection),
                units=len(units),
            )
            return units

    async def _store_page(
        self, context_id: ContextId, query: CommentQuery, page: int, page_size: int
    ) -> tuple[List[Comment], int]:
        filters = query.filters
        if filters.has_flag_predicates:
            basic = filters.basic
            units = await self.comment_repository.get_filtered_comments(
                context_id, basic, page, page_size
            )
            total = await self.comment_repository.get_comment_count(context_id, basic)
        elif query.sort_key is None:
            units = await self.comment_repository.get_comments_by_page(
                context_id, page, page_size
            )
            total = await self.comment_repository.get_comment_count(context_id)
        else:
            units = await self.comment_repository.get_sorted_comments(
                context_id, query.sort_key, query.sort_order, page, page_size
            )
            total = await self.comment_repository.get_comment_count(context_id)
        return units, total

    async def page(
        self,
        context_id: ContextId,
        query: CommentQuery,
        page: int,
        page_size: int,
        ranked: Optional[List[Comment]] = None,
    ) -> CommentPage:
        """Build one page, attaching direct replies to its top-level units.

        Args:
            context_id: Video whose comments are paged
            query: Filters, sort and search to apply
            page: Zero-based page index
            page_size: Units per page
            ranked: Output of rank(); None pages through the store
        """
        if ranked is None:
            units, total = await self._store_page(context_id, query, page, page_size)
        else:
            offset = page * page_size
            units, total = ranked[offset : offset + page_size], len(ranked)

        parent_ids = [u.comment_id for u in units if u.is_top_level]
        replies = (
            await self.comment_repository.get_comment_replies(parent_ids)
            if parent_ids
            else []
        )
        # Attached replies obey the same predicates as the units
        replies = apply_filters(replies, query.filters)
        return CommentPage(
            comments=_attach_replies(units, replies),
            has_more=(page + 1) * page_size < total,
            total_count=total,
            page=page,
            page_size=page_size,
        )

    async def get_page(
        self,
        context_id: ContextId,
        query: CommentQuery,
        page: int = 0,
        page_size: int = 10,
    ) -> CommentPage:
        """Rank and page in one call.

        A failing store yields an empty page with has_more False.
        """
        with logfire.span(
            "comment_query_service.get_page",
            context_id=context_id,
            page=page,
            page_size=page_size,
        ):
            try:
                ranked = await self.rank(context_id, query)
                return await self.page(context_id, query, page, page_size, ranked)
            except Exception as e:
                logfire.error(
                    "Comment page query failed",
                    context_id=context_id,
                    page=page,
                    error=str(e),
                    _exc_info=True,
                )
                return CommentPage.empty(page, page_size)
