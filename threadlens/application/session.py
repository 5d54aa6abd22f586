"""Live comment view session.

The session is the only writer of the visible comment window for one
open view. Every requery captures a generation number when it is
requested; its result is committed only if no newer request (context
switch, query edit, refresh) has been made since. In-flight store calls
are never cancelled, their results are just dropped.
"""

import asyncio
from typing import Any, Coroutine, Iterable, List, Optional

import logfire

from threadlens.config import Settings
from threadlens.domain.model import Comment, CommentPage, CommentQuery
from threadlens.domain.service import CommentQueryService, CommentService
from threadlens.domain.value import ContextId, FilterState
from threadlens.util.debounce import Debouncer

_QUERY_FIELDS = frozenset(CommentQuery.model_fields)
_FILTER_FIELDS = frozenset(FilterState.model_fields)


class CommentViewSession:
    """Paginated, debounced view over one context's comments."""

    def __init__(
        self,
        comment_query_service: CommentQueryService,
        comment_service: CommentService,
        settings: Settings,
    ) -> None:
        """Initialize view session.

        Args:
            comment_query_service: Ranking and paging service
            comment_service: Comment storage service (ingestion)
            settings: Application settings (page size, debounce delay)
        """
        self.comment_query_service = comment_query_service
        self.comment_service = comment_service
        self.page_size = settings.pagination.page_size
        self._debouncer = Debouncer(settings.debounce_seconds)

        self._context_id: Optional[ContextId] = None
        self._query = CommentQuery()
        self._generation = 0
        self._query_dirty = False

        self._visible: List[Comment] = []
        self._ranked: Optional[List[Comment]] = None
        self._pages_loaded = 0
        self._has_more = False
        self._total_count = 0
        self._loading = False

        self._tasks: set[asyncio.Task] = set()

    @property
    def context_id(self) -> Optional[ContextId]:
        return self._context_id

    @property
    def query(self) -> CommentQuery:
        return self._query

    @property
    def visible(self) -> tuple[Comment, ...]:
        return tuple(self._visible)

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def has_more(self) -> bool:
        return self._has_more

    @property
    def total_count(self) -> int:
        return self._total_count

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _reset_window(self) -> None:
        self._visible = []
        self._ranked = None
        self._pages_loaded = 0
        self._has_more = False
        self._total_count = 0

    def switch_context(self, context_id: ContextId) -> asyncio.Task:
        """Show a different context.

        The visible window is emptied before this returns; the returned
        task loads the first page.
        """
        self._debouncer.cancel()
        self._generation += 1
        self._context_id = context_id
        self._query_dirty = False
        self._reset_window()
        self._loading = True
        logfire.info("Context switched", context_id=context_id)
        return self._spawn(self._requery(self._generation, pages=1))

    def update_query(self, **changes: Any) -> None:
        """Edit the query; the requery runs once edits pause.

        Accepts CommentQuery fields (filters, sort_key, sort_order, search)
        and individual FilterState fields such as likes_threshold.

        Raises:
            TypeError: If a change names an unknown field
        """
        unknown = set(changes) - _QUERY_FIELDS - _FILTER_FIELDS
        if unknown:
            raise TypeError(f"Unknown query fields: {', '.join(sorted(unknown))}")

        filter_changes = {k: v for k, v in changes.items() if k in _FILTER_FIELDS}
        query_changes = {k: v for k, v in changes.items() if k in _QUERY_FIELDS}

        current = self._query
        filters = query_changes.pop("filters", current.filters)
        if filter_changes:
            if isinstance(filters, FilterState):
                filters = filters.model_dump()
            filters = FilterState.model_validate({**filters, **filter_changes})

        # Carry over only explicitly set fields so an unset sort key stays unset
        fields = {name: getattr(current, name) for name in current.model_fields_set}
        fields.update(query_changes)
        fields["filters"] = filters
        self._query = CommentQuery(**fields)
        self._generation += 1
        self._query_dirty = True
        if self._context_id is None:
            return
        self._loading = True
        self._debouncer.call(self._fire)

    def refresh(self) -> Optional[asyncio.Task]:
        """Requery now, keeping the number of visible pages."""
        if self._context_id is None:
            return None
        self._debouncer.cancel()
        return self._start_requery()

    def load_more(self) -> Optional[asyncio.Task]:
        """Extend the visible window by one page.

        With a query edit still pending this runs the full requery
        instead. Returns None when there is nothing to load.
        """
        if self._context_id is None:
            return None
        if self._query_dirty:
            self._debouncer.cancel()
            return self._start_requery()
        if self._loading or not self._has_more:
            return None
        self._loading = True
        return self._spawn(self._extend(self._generation, self._pages_loaded))

    def ingest(
        self, context_id: ContextId, comments: Iterable[Comment]
    ) -> Optional[asyncio.Task]:
        """Store a freshly fetched batch and schedule a refresh.

        Batches for any context other than the current one are ignored.
        """
        if context_id != self._context_id:
            logfire.warn(
                "Ignoring batch for inactive context",
                context_id=context_id,
                current_context_id=self._context_id,
            )
            return None
        return self._spawn(self._ingest(context_id, list(comments)))

    async def wait_idle(self) -> None:
        """Wait until no requery is pending or running."""
        while self._debouncer.pending or self._tasks:
            if self._tasks:
                await asyncio.gather(*self._tasks)
            else:
                await asyncio.sleep(self._debouncer.delay)

    def _fire(self) -> None:
        self._start_requery()

    def _start_requery(self) -> asyncio.Task:
        pages = 1 if self._query_dirty else max(self._pages_loaded, 1)
        self._query_dirty = False
        self._generation += 1
        self._loading = True
        return self._spawn(self._requery(self._generation, pages))

    async def _requery(self, generation: int, pages: int) -> None:
        context_id, query = self._context_id, self._query
        if context_id is None:
            return
        with logfire.span(
            "comment_view_session.requery",
            context_id=context_id,
            generation=generation,
            pages=pages,
        ):
            try:
                ranked = await self.comment_query_service.rank(context_id, query)
                # Served as one wide page so a refresh keeps the visible window
                result = await self.comment_query_service.page(
                    context_id, query, 0, pages * self.page_size, ranked
                )
            except Exception as e:
                logfire.error(
                    "Comment view query failed",
                    context_id=context_id,
                    error=str(e),
                    _exc_info=True,
                )
                ranked, result = None, CommentPage.empty(0, self.page_size)
                pages = 0

            if generation != self._generation:
                logfire.debug(
                    "Discarding stale result",
                    generation=generation,
                    current_generation=self._generation,
                )
                return

            self._ranked = ranked
            self._visible = list(result.comments)
            self._pages_loaded = pages
            self._has_more = result.has_more
            self._total_count = result.total_count
            self._loading = False

    async def _extend(self, generation: int, page: int) -> None:
        context_id, query = self._context_id, self._query
        if context_id is None:
            return
        with logfire.span(
            "comment_view_session.load_more", context_id=context_id, page=page
        ):
            try:
                result = await self.comment_query_service.page(
                    context_id, query, page, self.page_size, self._ranked
                )
            except Exception as e:
                logfire.error(
                    "Loading more comments failed",
                    context_id=context_id,
                    page=page,
                    error=str(e),
                    _exc_info=True,
                )
                result = CommentPage.empty(page, self.page_size)

            if generation != self._generation:
                return

            self._visible.extend(result.comments)
            if result.comments:
                self._pages_loaded = page + 1
            self._has_more = result.has_more
            self._total_count = result.total_count or self._total_count
            self._loading = False

    async def _ingest(self, context_id: ContextId, comments: List[Comment]) -> None:
        inserted = await self.comment_service.save_comments(context_id, comments)
        if inserted and context_id == self._context_id:
            self._debouncer.call(self._fire)
