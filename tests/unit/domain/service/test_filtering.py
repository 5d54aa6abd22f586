"""Unit tests for the filter engine."""

from datetime import datetime, timezone

from threadlens.domain.service.filtering import apply_basic_filters, apply_filters
from threadlens.domain.value import (
    DEFAULT_FILTER_STATE,
    BasicFilters,
    DateRange,
    FilterState,
    NumericRange,
)
from tests.conftest import make_comment


def _ms(*args) -> int:
    return int(datetime(*args, tzinfo=timezone.utc).timestamp() * 1000)


def _ids(comments):
    return [c.comment_id for c in comments]


class TestFilterIdentity:
    def test_default_state_returns_input_untouched(self):
        # Arrange
        comments = [make_comment(str(i), likes=i) for i in range(5)]

        # Act
        result = apply_filters(comments, DEFAULT_FILTER_STATE)

        # Assert
        assert result is comments

    def test_fresh_default_state_counts_as_default(self):
        comments = [make_comment("a")]

        assert apply_filters(comments, FilterState()) is comments

    def test_keyword_only_state_keeps_everything_in_a_copy(self):
        comments = [make_comment("a"), make_comment("b")]

        result = apply_filters(comments, FilterState(keyword="hello"))

        assert result == comments
        assert result is not comments

    def test_empty_collection(self):
        assert apply_filters([], FilterState(hearted=True)) == []


class TestFlagFilters:
    def test_each_set_flag_requires_record_flag(self):
        # Arrange
        comments = [
            make_comment("plain"),
            make_comment("hearted", is_hearted=True),
            make_comment("both", is_hearted=True, has_links=True),
        ]

        # Act
        result = apply_filters(comments, FilterState(hearted=True, has_links=True))

        # Assert
        assert _ids(result) == ["both"]

    def test_basic_filters_keep_order(self):
        comments = [
            make_comment("c", is_author_content_creator=True),
            make_comment("x"),
            make_comment("a", is_author_content_creator=True),
        ]

        result = apply_basic_filters(comments, BasicFilters(creator=True))

        assert _ids(result) == ["c", "a"]


class TestRangeFilters:
    def test_bounds_are_inclusive(self):
        # Arrange
        comments = [make_comment(str(n), likes=n) for n in (4, 5, 10, 11)]
        filters = FilterState(likes_threshold=NumericRange(min=5, max=10))

        # Act
        result = apply_filters(comments, filters)

        # Assert
        assert _ids(result) == ["5", "10"]

    def test_open_upper_bound(self):
        comments = [make_comment(str(n), reply_count=n) for n in (0, 2, 500)]
        filters = FilterState(replies_limit=NumericRange(min=2))

        assert _ids(apply_filters(comments, filters)) == ["2", "500"]

    def test_word_count_range(self):
        comments = [make_comment("short", "hi"), make_comment("long", "a b c d e f")]
        filters = FilterState(word_count=NumericRange(min=3, max=100))

        assert _ids(apply_filters(comments, filters)) == ["long"]

    def test_date_range_is_inclusive(self):
        # Arrange
        comments = [
            make_comment("before", published_date=_ms(2023, 12, 31, 23, 59)),
            make_comment("start", published_date=_ms(2024, 1, 1)),
            make_comment("end", published_date=_ms(2024, 1, 31)),
            make_comment("after", published_date=_ms(2024, 2, 1)),
        ]
        filters = FilterState(
            date_time_range=DateRange(start="2024-01-01", end="2024-01-31T00:00:00")
        )

        # Act
        result = apply_filters(comments, filters)

        # Assert
        assert _ids(result) == ["start", "end"]

    def test_unparseable_date_bound_is_ignored(self):
        comments = [make_comment("a", published_date=0)]
        filters = FilterState(date_time_range=DateRange(start="not a date"))

        assert _ids(apply_filters(comments, filters)) == ["a"]
