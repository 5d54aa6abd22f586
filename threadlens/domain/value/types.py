"""Enumerations used to describe comment queries."""

from enum import Enum

import logfire


class SortKey(str, Enum):
    """Ranking strategy applied to a comment collection.

    The first six keys compare a single field. The last three are
    composite scores that need whole-collection statistics.
    """

    DATE = "date"
    LIKES = "likes"
    REPLIES = "replies"
    LENGTH = "length"
    AUTHOR = "author"
    RANDOM = "random"
    NORMALIZED = "normalized"
    ZSCORE = "zscore"
    BAYESIAN = "bayesian"

    @property
    def is_composite(self) -> bool:
        return self in COMPOSITE_SORT_KEYS


COMPOSITE_SORT_KEYS = frozenset({SortKey.NORMALIZED, SortKey.ZSCORE, SortKey.BAYESIAN})

# Keys a persisted store can serve straight from an index
INDEXED_SORT_KEYS = frozenset(
    {SortKey.DATE, SortKey.LIKES, SortKey.REPLIES, SortKey.LENGTH, SortKey.AUTHOR}
)


class SortOrder(str, Enum):
    """Direction of a sort."""

    ASC = "asc"
    DESC = "desc"


def parse_sort_key(value: "SortKey | str | None") -> SortKey | None:
    """Parse a sort key coming from loosely typed input.

    Unknown or empty values return None, which callers treat as
    "keep the incoming order" instead of failing.
    """
    if value is None or isinstance(value, SortKey):
        return value
    try:
        return SortKey(value.strip().lower())
    except (ValueError, AttributeError):
        if value:
            logfire.warn("Unknown sort key, keeping original order", sort_key=value)
        return None


def parse_sort_order(value: "SortOrder | str | None") -> SortOrder:
    """Parse a sort order, defaulting to descending."""
    if isinstance(value, SortOrder):
        return value
    if isinstance(value, str) and value.strip().lower() == SortOrder.ASC.value:
        return SortOrder.ASC
    return SortOrder.DESC
