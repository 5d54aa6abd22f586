"""Unit tests for the sort engine."""

import random

from threadlens.domain.service.sorting import order_comments, sort_comments
from threadlens.domain.value import FilterState, NumericRange, SortKey, SortOrder
from tests.conftest import make_comment


def _ids(comments):
    return [c.comment_id for c in comments]


def _synthetic(n: int, seed: int = 7):
    rng = random.Random(seed)
    return [
        make_comment(
            f"c{i}",
            " ".join("w" for _ in range(rng.randint(0, 20))),
            likes=rng.randint(0, 50),
            reply_count=rng.randint(0, 10),
            published_date=rng.randint(0, 1_000_000),
        )
        for i in range(n)
    ]


class TestSimpleKeys:
    def test_date_descending(self):
        comments = [
            make_comment("old", published_date=1),
            make_comment("new", published_date=3),
            make_comment("mid", published_date=2),
        ]

        assert _ids(order_comments(comments, SortKey.DATE)) == ["new", "mid", "old"]

    def test_likes_ascending(self):
        comments = [make_comment("b", likes=5), make_comment("a", likes=1)]

        result = order_comments(comments, "likes", "asc")

        assert _ids(result) == ["a", "b"]

    def test_length_uses_characters_not_words(self):
        # Arrange - fewer words but more characters
        comments = [
            make_comment("words", "a b c d"),
            make_comment("chars", "incomprehensibilities"),
        ]

        # Act
        result = order_comments(comments, SortKey.LENGTH, SortOrder.DESC)

        # Assert
        assert _ids(result) == ["chars", "words"]

    def test_author_ignores_case_and_accents(self):
        comments = [
            make_comment("1", author="zoe"),
            make_comment("2", author="Émile"),
            make_comment("3", author="bob"),
        ]

        result = order_comments(comments, SortKey.AUTHOR, SortOrder.ASC)

        assert _ids(result) == ["3", "2", "1"]

    def test_ties_keep_input_order_in_both_directions(self):
        comments = [make_comment(str(i), likes=1) for i in range(5)]

        assert _ids(order_comments(comments, SortKey.LIKES, SortOrder.DESC)) == list("01234")
        assert _ids(order_comments(comments, SortKey.LIKES, SortOrder.ASC)) == list("01234")


class TestDegradedKeys:
    def test_unknown_key_keeps_order(self):
        comments = [make_comment("b", likes=1), make_comment("a", likes=9)]

        assert _ids(order_comments(comments, "popularity")) == ["b", "a"]

    def test_none_key_keeps_order(self):
        comments = [make_comment("b"), make_comment("a")]

        assert _ids(order_comments(comments, None)) == ["b", "a"]

    def test_empty_input(self):
        assert order_comments([], SortKey.ZSCORE) == []


class TestRandom:
    def test_returns_a_permutation(self):
        comments = _synthetic(50)

        result = order_comments(comments, SortKey.RANDOM, rng=random.Random(1))

        assert sorted(_ids(result)) == sorted(_ids(comments))

    def test_seeded_rng_is_repeatable(self):
        comments = _synthetic(50)

        first = order_comments(comments, SortKey.RANDOM, rng=random.Random(3))
        second = order_comments(comments, SortKey.RANDOM, rng=random.Random(3))

        assert _ids(first) == _ids(second)


class TestCompositeKeys:
    def test_normalized_sort_is_repeatable_on_large_input(self):
        # Arrange
        comments = _synthetic(1000)

        # Act
        first = order_comments(comments, SortKey.NORMALIZED)
        second = order_comments(comments, SortKey.NORMALIZED)

        # Assert
        assert _ids(first) == _ids(second)
        assert len(first) == 1000

    def test_does_not_mutate_input(self):
        comments = _synthetic(20)
        before = _ids(comments)

        order_comments(comments, SortKey.BAYESIAN)

        assert _ids(comments) == before

    def test_zscore_orders_by_weighted_deviation(self):
        comments = [
            make_comment("quiet", "w", likes=0, reply_count=0),
            make_comment("busy", "w", likes=10, reply_count=10),
        ]

        assert _ids(order_comments(comments, SortKey.ZSCORE)) == ["busy", "quiet"]


class TestSortComments:
    def test_filters_before_sorting(self):
        # Arrange
        comments = [
            make_comment("a", likes=1),
            make_comment("b", likes=50),
            make_comment("c", likes=20),
        ]
        filters = FilterState(likes_threshold=NumericRange(min=10))

        # Act
        result = sort_comments(comments, SortKey.LIKES, SortOrder.ASC, filters)

        # Assert
        assert _ids(result) == ["c", "b"]
