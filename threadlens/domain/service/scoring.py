"""Composite ranking scores.

All scorers are pure: (comment, precomputed stats) -> float. The optional
word_count argument lets a caller that already knows the value skip the
lookup on the record.
"""

from threadlens.domain.model import Comment
from threadlens.domain.service.statistics import AvgValues, MaxValues, ZScoreStats

LIKE_WEIGHT = 0.3
REPLY_WEIGHT = 0.5
WORD_WEIGHT = 0.2

# Smoothing constant (pseudo-count) for the Bayesian average
BAYESIAN_M = 5


def calculate_normalized(
    comment: Comment, max_values: MaxValues, word_count: int | None = None
) -> float:
    words = comment.word_count if word_count is None else word_count
    return (
        comment.likes / max_values.likes * LIKE_WEIGHT
        + comment.reply_count / max_values.replies * REPLY_WEIGHT
        + words / max_values.word_count * WORD_WEIGHT
    )


def _z_score(value: float, mean: float, std_dev: float) -> float:
    if std_dev == 0:
        return 0.0
    return (value - mean) / std_dev


def calculate_weighted_z_score(
    comment: Comment, stats: ZScoreStats, word_count: int | None = None
) -> float:
    words = comment.word_count if word_count is None else word_count
    likes_z = _z_score(comment.likes, stats.likes_mean, stats.likes_std_dev)
    replies_z = _z_score(comment.reply_count, stats.replies_mean, stats.replies_std_dev)
    words_z = _z_score(words, stats.word_count_mean, stats.word_count_std_dev)
    return likes_z * LIKE_WEIGHT + replies_z * REPLY_WEIGHT + words_z * WORD_WEIGHT


def calculate_bayesian_average(
    comment: Comment,
    avg_values: AvgValues,
    m: int = BAYESIAN_M,
    word_count: int | None = None,
) -> float:
    """Engagement per word, smoothed towards the collection average.

    (likes + replies + m * (mean_likes + mean_replies)) / (word_count + m)
    """
    words = comment.word_count if word_count is None else word_count
    denominator = words + m
    if denominator == 0:
        return 0.0
    engagement = comment.likes + comment.reply_count
    prior = m * (avg_values.likes + avg_values.replies)
    return (engagement + prior) / denominator
