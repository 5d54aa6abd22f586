"""Sort engine.

Filters a collection, then orders a copy of it by one of the SortKey
strategies. Composite strategies precompute their collection statistics
once, before any record is scored, and each record is scored once.
"""

import random
from collections.abc import Callable
from typing import Any

from threadlens.domain.model import Comment
from threadlens.domain.service.filtering import apply_filters
from threadlens.domain.service.scoring import (
    calculate_bayesian_average,
    calculate_normalized,
    calculate_weighted_z_score,
)
from threadlens.domain.service.statistics import (
    get_avg_values,
    get_max_values,
    get_stats,
)
from threadlens.domain.value import (
    DEFAULT_FILTER_STATE,
    FilterState,
    SortKey,
    SortOrder,
    parse_sort_key,
    parse_sort_order,
)
from threadlens.util.text import normalize_text

SortKeyFunc = Callable[[Comment], Any]


def _author_key(comment: Comment) -> tuple[str, str]:
    # Case and accent folding first, raw value as tie-breaker
    return normalize_text(comment.author), comment.author


def build_key_func(sort_key: SortKey, comments: list[Comment]) -> SortKeyFunc | None:
    """Return the key function for a sort key.

    Composite keys compute only the statistics their scorer needs, from
    the full collection being sorted. Returns None for RANDOM.
    """
    match sort_key:
        case SortKey.DATE:
            return lambda c: c.published_date
        case SortKey.LIKES:
            return lambda c: c.likes
        case SortKey.REPLIES:
            return lambda c: c.reply_count
        case SortKey.LENGTH:
            # Characters, not words
            return lambda c: len(c.content)
        case SortKey.AUTHOR:
            return _author_key
        case SortKey.NORMALIZED:
            max_values = get_max_values(comments)
            return lambda c: calculate_normalized(c, max_values)
        case SortKey.ZSCORE:
            stats = get_stats(comments)
            return lambda c: calculate_weighted_z_score(c, stats)
        case SortKey.BAYESIAN:
            avg_values = get_avg_values(comments)
            return lambda c: calculate_bayesian_average(c, avg_values)
    return None


def order_comments(
    comments: list[Comment],
    sort_key: SortKey | str | None,
    sort_order: SortOrder | str | None = SortOrder.DESC,
    rng: random.Random | None = None,
) -> list[Comment]:
    """Order a copy of comments without filtering.

    Ties keep their incoming relative order in both directions. Unknown
    or empty sort keys keep the incoming order. RANDOM is a best-effort
    shuffle and is not repeatable across calls.
    """
    key = parse_sort_key(sort_key)
    items = list(comments)
    if key is None or not items:
        return items

    key_func = build_key_func(key, items)
    if key_func is None:
        # RANDOM has no key function
        (rng or random).shuffle(items)
        return items

    # key= scores each record exactly once; reverse=True keeps ties stable
    return sorted(
        items, key=key_func, reverse=parse_sort_order(sort_order) is SortOrder.DESC
    )


def sort_comments(
    comments: list[Comment],
    sort_key: SortKey | str | None,
    sort_order: SortOrder | str | None = SortOrder.DESC,
    filters: FilterState = DEFAULT_FILTER_STATE,
    rng: random.Random | None = None,
) -> list[Comment]:
    """Filter then sort comments, never mutating the caller's list."""
    filtered = apply_filters(comments, filters)
    return order_comments(filtered, sort_key, sort_order, rng=rng)
