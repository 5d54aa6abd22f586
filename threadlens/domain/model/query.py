"""Query and result models for paginated comment views."""

from pydantic import Field, field_validator

from threadlens.domain.model.comment import Comment
from threadlens.domain.model.common import DomainModel
from threadlens.domain.value import (
    DEFAULT_FILTER_STATE,
    FilterState,
    SortKey,
    SortOrder,
    parse_sort_key,
    parse_sort_order,
)


class CommentQuery(DomainModel):
    """Everything that decides which comments are visible and in what order.

    A sort_key of None keeps the incoming order (store order, or search
    order when a keyword is active).
    """

    filters: FilterState = DEFAULT_FILTER_STATE
    sort_key: SortKey | None = SortKey.DATE
    sort_order: SortOrder = SortOrder.DESC
    search: str = ""

    @field_validator("sort_key", mode="before")
    @classmethod
    def validate_sort_key(cls, v: object) -> SortKey | None:
        return parse_sort_key(v)  # type: ignore[arg-type]

    @field_validator("sort_order", mode="before")
    @classmethod
    def validate_sort_order(cls, v: object) -> SortOrder:
        return parse_sort_order(v)  # type: ignore[arg-type]

    @property
    def keyword(self) -> str:
        """Active search keyword, falling back to the filter keyword."""
        return (self.search or self.filters.keyword).strip()

    @property
    def result_sort_key(self) -> SortKey | None:
        """Sort key applied after ranking.

        Search results keep their match order unless a sort key was
        passed explicitly; the date default does not reorder them.
        """
        if self.keyword and "sort_key" not in self.model_fields_set:
            return None
        return self.sort_key


class CommentPage(DomainModel):
    """A page of thread-consistent comments handed to the presentation layer."""

    comments: list[Comment] = Field(default_factory=list)
    has_more: bool = False
    total_count: int = 0
    page: int = 0
    page_size: int = 0

    @classmethod
    def empty(cls, page: int = 0, page_size: int = 0) -> "CommentPage":
        return cls(page=page, page_size=page_size)
