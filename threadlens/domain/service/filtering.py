"""Filter engine.

Evaluates boolean flag predicates and inclusive range predicates against
comment records, keeping the original relative order.
"""

from collections.abc import Callable

from threadlens.domain.model import Comment
from threadlens.domain.value import DEFAULT_FILTER_STATE, BasicFilters, FilterState

Predicate = Callable[[Comment], bool]


def _flag_predicates(flags: BasicFilters) -> list[Predicate]:
    predicates: list[Predicate] = []
    if flags.creator:
        predicates.append(lambda c: c.is_author_content_creator)
    if flags.has_links:
        predicates.append(lambda c: c.has_links)
    if flags.hearted:
        predicates.append(lambda c: c.is_hearted)
    if flags.member:
        predicates.append(lambda c: c.is_member)
    if flags.donated:
        predicates.append(lambda c: c.is_donated)
    if flags.has_timestamp:
        predicates.append(lambda c: c.has_timestamp)
    return predicates


def compile_predicates(filters: FilterState) -> list[Predicate]:
    """Build the active predicates for a filter state.

    Date bounds are parsed here, once, rather than per record.
    """
    predicates = _flag_predicates(filters.basic)

    likes = filters.likes_threshold
    if not likes.is_unbounded:
        predicates.append(lambda c: likes.contains(c.likes))

    replies = filters.replies_limit
    if not replies.is_unbounded:
        predicates.append(lambda c: replies.contains(c.reply_count))

    words = filters.word_count
    if not words.is_unbounded:
        predicates.append(lambda c: words.contains(c.word_count))

    start, end = filters.date_time_range.bounds_ms()
    if start is not None:
        predicates.append(lambda c: c.published_date >= start)
    if end is not None:
        predicates.append(lambda c: c.published_date <= end)

    return predicates


def apply_filters(comments: list[Comment], filters: FilterState) -> list[Comment]:
    """Return the comments that satisfy every active predicate.

    The default filter state returns the input list itself, untouched.
    """
    if filters == DEFAULT_FILTER_STATE:
        return comments

    predicates = compile_predicates(filters)
    if not predicates:
        return list(comments)
    return [c for c in comments if all(p(c) for p in predicates)]


def apply_basic_filters(comments: list[Comment], flags: BasicFilters) -> list[Comment]:
    """Apply only the boolean flag predicates."""
    predicates = _flag_predicates(flags)
    if not predicates:
        return list(comments)
    return [c for c in comments if all(p(c) for p in predicates)]
