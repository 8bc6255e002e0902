"""
Sorting and filtering of search results.

Sorting runs locally over whatever the backend returned. The comparator is
picked once per sort from the field's kind (date, amount or plain text).
A pair where either side lacks the sort field compares as equal, so such
documents keep their relative position; this relies on the sort being
stable. A field that is present with an empty value is still compared.

Filtering is normally the backend's job: `build_query_params` only shapes
the request. `filter_documents` applies the same criteria locally when no
backend round-trip is wanted.
"""

from collections.abc import Callable, Sequence
from enum import Enum
from functools import cmp_to_key
import unicodedata
from typing import Any
from loguru import logger
from ..models.document import Document, WellKnownField
from ..models.search import SearchPredicate, SearchState, SortDirection
from .formatters import parse_amount, parse_date


class FieldKind(str, Enum):
    DATE = "date"
    AMOUNT = "amount"
    STRING = "string"


DATE_FIELDS = frozenset({WellKnownField.INVOICE_DATE.value, WellKnownField.DUE_DATE.value})
AMOUNT_FIELDS = frozenset({WellKnownField.TOTAL_AMOUNT.value})

# Fields matched by free-text search when no specific field is selected
TEXT_SEARCH_FIELDS = (WellKnownField.INVOICE_NUMBER.value, WellKnownField.ISSUER_NAME.value)


def resolve_field_kind(field: str) -> FieldKind:
    if field in DATE_FIELDS:
        return FieldKind.DATE
    if field in AMOUNT_FIELDS:
        return FieldKind.AMOUNT
    return FieldKind.STRING


def _sign(delta: float) -> int:
    return (delta > 0) - (delta < 0)


def compare_dates(a: Any, b: Any) -> int:
    left, right = parse_date(a), parse_date(b)
    if left is None or right is None:
        return 0
    return _sign((left - right).total_seconds())


def compare_amounts(a: Any, b: Any) -> int:
    left, right = parse_amount(a), parse_amount(b)
    if left is None or right is None:
        return 0
    return _sign(left - right)


def _collation_key(text: str) -> tuple[str, str, str]:
    # accents and case ignored first, then accents, then lowercase before uppercase
    folded = text.casefold()
    base = "".join(c for c in unicodedata.normalize("NFKD", folded) if not unicodedata.combining(c))
    return base, folded, text.swapcase()


def compare_strings(a: Any, b: Any) -> int:
    left, right = _collation_key(str(a)), _collation_key(str(b))
    return (left > right) - (left < right)


COMPARATORS: dict[FieldKind, Callable[[Any, Any], int]] = {
    FieldKind.DATE: compare_dates,
    FieldKind.AMOUNT: compare_amounts,
    FieldKind.STRING: compare_strings,
}


def _present_value(document: Document, field: str) -> Any:
    # a present field counts even with an empty value; other keys need a truthy value
    if document.resolve_field_name(field) is not None:
        return document.field_value(field)
    return document.sort_value(field) or None


def sort_documents(
    documents: Sequence[Document],
    field: str,
    direction: SortDirection | str = SortDirection.ASC,
) -> list[Document]:
    """
    Return a new list of documents ordered by `field`.

    Args:
        documents: Documents to order (not modified)
        field: Field name, or a top-level attribute name
        direction: "asc" or "desc"

    Returns:
        Stably sorted copy of `documents`
    """
    direction = SortDirection(direction)
    compare_values = COMPARATORS[resolve_field_kind(field)]
    sign = -1 if direction is SortDirection.DESC else 1

    def compare(a: Document, b: Document) -> int:
        left, right = _present_value(a, field), _present_value(b, field)
        if left is None or right is None:
            return 0
        return sign * compare_values(left, right)

    return sorted(documents, key=cmp_to_key(compare))


def sort_for_state(documents: Sequence[Document], state: SearchState) -> list[Document]:
    return sort_documents(documents, state.sort_field, state.sort_direction)


def build_query_params(predicate: SearchPredicate) -> dict[str, str]:
    """
    Backend search query for `predicate`, without empty entries.

    The free-text criterion travels as `query`.
    """
    candidates = {
        "query": predicate.text,
        "field": predicate.field,
        "date_from": predicate.date_from,
        "date_to": predicate.date_to,
        "amount_min": predicate.amount_min,
        "amount_max": predicate.amount_max,
    }
    return {key: value for key, value in candidates.items() if value}


def _matches_text(document: Document, text: str, field: str | None) -> bool:
    needle = text.casefold()
    names = (field,) if field else TEXT_SEARCH_FIELDS
    for name in names:
        value = document.sort_value(name)
        if value and needle in str(value).casefold():
            return True
    return False


def _within(value, low, high) -> bool:
    if value is None:
        return False
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


def filter_documents(documents: Sequence[Document], predicate: SearchPredicate) -> list[Document]:
    """
    Local fallback for backend search.

    Supplied criteria are ANDed: case-insensitive substring on the invoice
    number or sender name (or on `predicate.field` when set), inclusive
    invoice-date range and inclusive total-amount range. A document lacking
    the value a range needs does not match that range.
    """
    date_from = parse_date(predicate.date_from) if predicate.date_from else None
    date_to = parse_date(predicate.date_to) if predicate.date_to else None
    amount_min = parse_amount(predicate.amount_min) if predicate.amount_min else None
    amount_max = parse_amount(predicate.amount_max) if predicate.amount_max else None
    filter_dates = date_from is not None or date_to is not None
    filter_amounts = amount_min is not None or amount_max is not None

    if (predicate.date_from and date_from is None) or (predicate.date_to and date_to is None):
        logger.warning("Ignoring unparseable date bound", date_from=predicate.date_from, date_to=predicate.date_to)
    if (predicate.amount_min and amount_min is None) or (predicate.amount_max and amount_max is None):
        logger.warning("Ignoring unparseable amount bound", amount_min=predicate.amount_min, amount_max=predicate.amount_max)

    results = []
    for document in documents:
        if predicate.text and not _matches_text(document, predicate.text, predicate.field):
            continue
        if filter_dates:
            invoice_date = parse_date(document.field_value(WellKnownField.INVOICE_DATE.value))
            if not _within(invoice_date, date_from, date_to):
                continue
        if filter_amounts:
            total = parse_amount(document.field_value(WellKnownField.TOTAL_AMOUNT.value))
            if not _within(total, amount_min, amount_max):
                continue
        results.append(document)
    return results
