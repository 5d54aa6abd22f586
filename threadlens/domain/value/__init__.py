"""Domain value objects for threadlens."""

from threadlens.domain.value.filter import (
    DEFAULT_FILTER_STATE,
    BasicFilters,
    DateRange,
    FilterState,
    NumericRange,
)
from threadlens.domain.value.identifiers import CommentId, ContextId
from threadlens.domain.value.types import (
    COMPOSITE_SORT_KEYS,
    INDEXED_SORT_KEYS,
    SortKey,
    SortOrder,
    parse_sort_key,
    parse_sort_order,
)

__all__ = [
    # Identifiers
    "CommentId",
    "ContextId",
    # Types
    "SortKey",
    "SortOrder",
    "COMPOSITE_SORT_KEYS",
    "INDEXED_SORT_KEYS",
    "parse_sort_key",
    "parse_sort_order",
    # Filters
    "NumericRange",
    "DateRange",
    "BasicFilters",
    "FilterState",
    "DEFAULT_FILTER_STATE",
]
