from enum import Enum
from pydantic import BaseModel, ConfigDict


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class SearchPredicate(BaseModel):
    """Filter criteria for a search. Empty values mean "not filtered"."""
    model_config = ConfigDict(frozen=True)

    text: str | None = None
    field: str | None = None
    date_from: str | None = None
    date_to: str | None = None
    amount_min: str | None = None
    amount_max: str | None = None

    def is_empty(self) -> bool:
        return not any(self.model_dump().values())


class SearchState(BaseModel):
    """
    Query and ordering state of one search session.

    Never mutated in place: every user action produces a new state through
    `with_sort` or `with_filters`.
    """
    model_config = ConfigDict(frozen=True)

    predicate: SearchPredicate = SearchPredicate()
    sort_field: str = "invoice_date"
    sort_direction: SortDirection = SortDirection.DESC

    def with_sort(self, field: str) -> "SearchState":
        """Header click: same column toggles direction, a new column starts ascending."""
        if field == self.sort_field:
            return self.model_copy(update={"sort_direction": self.sort_direction.flipped()})
        return self.model_copy(update={"sort_field": field, "sort_direction": SortDirection.ASC})

    def with_filters(self, **changes) -> "SearchState":
        predicate = SearchPredicate.model_validate({**self.predicate.model_dump(), **changes})
        return self.model_copy(update={"predicate": predicate})
