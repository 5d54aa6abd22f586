"""Dataset-wide statistics consumed by the composite scorers.

Each function walks the collection once (twice for variance) and returns
a neutral structure on empty input, so callers never special-case it.
The sort engine computes these exactly once per sort and hands the
result to every score computation.
"""

import math
from collections.abc import Sequence

from threadlens.domain.model import Comment
from threadlens.domain.value.common import ValueObject


class MaxValues(ValueObject):
    """Per-feature maxima, floored at 1."""

    likes: int = 1
    replies: int = 1
    word_count: int = 1


class ZScoreStats(ValueObject):
    """Population mean and standard deviation per feature.

    A zero standard deviation is stored as 1.
    """

    likes_mean: float = 0.0
    likes_std_dev: float = 1.0
    replies_mean: float = 0.0
    replies_std_dev: float = 1.0
    word_count_mean: float = 0.0
    word_count_std_dev: float = 1.0


class AvgValues(ValueObject):
    """Mean likes and replies across the collection."""

    likes: float = 0.0
    replies: float = 0.0


def get_max_values(comments: Sequence[Comment]) -> MaxValues:
    max_likes = max_replies = max_words = 1
    for comment in comments:
        if comment.likes > max_likes:
            max_likes = comment.likes
        if comment.reply_count > max_replies:
            max_replies = comment.reply_count
        if comment.word_count > max_words:
            max_words = comment.word_count
    return MaxValues(likes=max_likes, replies=max_replies, word_count=max_words)


def _std_dev(sum_sq: float, n: int) -> float:
    std = math.sqrt(sum_sq / n)
    return std if std > 0 else 1.0


def get_stats(comments: Sequence[Comment]) -> ZScoreStats:
    n = len(comments)
    if n == 0:
        return ZScoreStats()

    likes_total = replies_total = words_total = 0
    for comment in comments:
        likes_total += comment.likes
        replies_total += comment.reply_count
        words_total += comment.word_count
    likes_mean = likes_total / n
    replies_mean = replies_total / n
    words_mean = words_total / n

    likes_sq = replies_sq = words_sq = 0.0
    for comment in comments:
        likes_sq += (comment.likes - likes_mean) ** 2
        replies_sq += (comment.reply_count - replies_mean) ** 2
        words_sq += (comment.word_count - words_mean) ** 2

    return ZScoreStats(
        likes_mean=likes_mean,
        likes_std_dev=_std_dev(likes_sq, n),
        replies_mean=replies_mean,
        replies_std_dev=_std_dev(replies_sq, n),
        word_count_mean=words_mean,
        word_count_std_dev=_std_dev(words_sq, n),
    )


def get_avg_values(comments: Sequence[Comment]) -> AvgValues:
    n = len(comments)
    if n == 0:
        return AvgValues()
    likes_total = replies_total = 0
    for comment in comments:
        likes_total += comment.likes
        replies_total += comment.reply_count
    return AvgValues(likes=likes_total / n, replies=replies_total / n)
