"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .filtering import apply_basic_filters, apply_filters
from .query_service import CommentQueryService
from .scoring import (
    calculate_bayesian_average,
    calculate_normalized,
    calculate_weighted_z_score,
)
from .search import search_comments
from .sorting import order_comments, sort_comments
from .statistics import (
    AvgValues,
    MaxValues,
    ZScoreStats,
    get_avg_values,
    get_max_values,
    get_stats,
)
from .text_matcher import TextMatcher, TokenWindowMatcher

__all__ = [
    "AvgValues",
    "CommentQueryService",
    "CommentService",
    "MaxValues",
    "Service",
    "TextMatcher",
    "TokenWindowMatcher",
    "ZScoreStats",
    "apply_basic_filters",
    "apply_filters",
    "calculate_bayesian_average",
    "calculate_normalized",
    "calculate_weighted_z_score",
    "get_avg_values",
    "get_max_values",
    "get_stats",
    "order_comments",
    "search_comments",
    "sort_comments",
]
