"""Filter value objects.

A FilterState is validated when it is built, so the filter engine can
evaluate it without re-checking optional or loosely typed fields.
"""

import math
from datetime import datetime, timezone
from typing import Any

import logfire
from pydantic import model_validator

from threadlens.domain.value.common import ValueObject


class NumericRange(ValueObject):
    """Inclusive numeric range.

    max=None means there is no upper bound.
    """

    min: int = 0
    max: int | None = None

    @model_validator(mode="before")
    @classmethod
    def coerce_unbounded(cls, data: Any) -> Any:
        """Accept the loose "no upper bound" spellings ('' and infinity)."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("min") in (None, ""):
            data["min"] = 0
        upper = data.get("max")
        if upper == "" or (isinstance(upper, float) and math.isinf(upper)):
            data["max"] = None
        return data

    @model_validator(mode="after")
    def validate_bounds(self) -> "NumericRange":
        if self.min < 0:
            raise ValueError("Range minimum must be non-negative")
        if self.max is not None and self.max < self.min:
            raise ValueError("Range maximum must not be below its minimum")
        return self

    @property
    def is_unbounded(self) -> bool:
        return self.min == 0 and self.max is None

    def contains(self, value: int) -> bool:
        if value < self.min:
            return False
        return self.max is None or value <= self.max


def parse_date_bound(value: str) -> int | None:
    """Parse an ISO-8601 date or datetime into epoch milliseconds.

    Naive values are read as UTC. Unparseable values are logged and
    treated as an absent bound.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        logfire.warn("Ignoring unparseable date bound", value=value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)


class DateRange(ValueObject):
    """Inclusive publish date range; empty strings mean no bound."""

    start: str = ""
    end: str = ""

    @model_validator(mode="before")
    @classmethod
    def coerce_empty(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {k: ("" if v is None else v) for k, v in data.items()}

    @property
    def is_unbounded(self) -> bool:
        return not self.start and not self.end

    def bounds_ms(self) -> tuple[int | None, int | None]:
        """Return (start, end) as epoch milliseconds, parsed once."""
        return parse_date_bound(self.start), parse_date_bound(self.end)


class BasicFilters(ValueObject):
    """Boolean flag filters; a set flag requires the matching record flag."""

    creator: bool = False
    has_links: bool = False
    hearted: bool = False
    member: bool = False
    donated: bool = False
    has_timestamp: bool = False

    @property
    def is_active(self) -> bool:
        return any(
            (
                self.creator,
                self.has_links,
                self.hearted,
                self.member,
                self.donated,
                self.has_timestamp,
            )
        )


class FilterState(ValueObject):
    """Complete filter configuration for a comment view."""

    keyword: str = ""

    creator: bool = False
    has_links: bool = False
    hearted: bool = False
    member: bool = False
    donated: bool = False
    has_timestamp: bool = False

    likes_threshold: NumericRange = NumericRange()
    replies_limit: NumericRange = NumericRange()
    word_count: NumericRange = NumericRange()
    date_time_range: DateRange = DateRange()

    @classmethod
    def default(cls) -> "FilterState":
        return DEFAULT_FILTER_STATE

    @property
    def is_default(self) -> bool:
        return self == DEFAULT_FILTER_STATE

    @property
    def basic(self) -> BasicFilters:
        return BasicFilters(
            creator=self.creator,
            has_links=self.has_links,
            hearted=self.hearted,
            member=self.member,
            donated=self.donated,
            has_timestamp=self.has_timestamp,
        )

    @property
    def has_flag_predicates(self) -> bool:
        return self.basic.is_active

    @property
    def has_range_predicates(self) -> bool:
        return not (
            self.likes_threshold.is_unbounded
            and self.replies_limit.is_unbounded
            and self.word_count.is_unbounded
            and self.date_time_range.is_unbounded
        )


DEFAULT_FILTER_STATE = FilterState()
