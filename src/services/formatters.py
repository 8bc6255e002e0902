"""
Display helpers shared by the dashboard, search table and detail view.

Extracted values are free text, so every parser here returns None
instead of raising.
"""

import math
import re
from datetime import datetime
from typing import Any
from dateutil import parser as date_parser

# Two defaults that differ only in the year; a result that changes with the
# default had no year of its own. Missing month and day become 1.
_DATE_DEFAULTS = (datetime(2000, 1, 1), datetime(2004, 1, 1))

# Leading numeric prefix, the way a browser's parseFloat reads "12.5 USD"
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

CURRENCY_SYMBOLS = {
    "USD": "$",
    "AUD": "A$",
    "CAD": "CA$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
}


def parse_amount(value: Any) -> float | None:
    """
    Parse the leading number of an amount string.

    Returns None for empty, non-numeric or non-finite input.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None

    match = _LEADING_FLOAT.match(str(value))
    if not match:
        return None
    number = float(match.group(1))
    return number if math.isfinite(number) else None


def parse_date(value: Any) -> datetime | None:
    """
    Parse a calendar date string into a naive UTC datetime.

    Timezone-aware values are normalized to UTC so that all results compare
    against each other. Returns None when the value is not a date, including
    partial dates with no year such as "March".
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            parsed, other = (date_parser.parse(text, default=d) for d in _DATE_DEFAULTS)
        except (ValueError, OverflowError):
            return None
        if parsed.year != other.year:
            return None

    if parsed.tzinfo is not None:
        try:
            parsed = (parsed - parsed.utcoffset()).replace(tzinfo=None)
        except OverflowError:
            return None
    return parsed


def format_date(value: Any) -> str | None:
    """Format as "Jan 5, 2024"; None when the value is not a date."""
    parsed = parse_date(value)
    if parsed is None:
        return None
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"


def format_currency(amount: float, currency: str = "USD") -> str:
    """Format an amount with two decimals and thousands separators, e.g. "$1,234.50"."""
    code = (currency or "USD").upper()
    symbol = CURRENCY_SYMBOLS.get(code)
    sign = "-" if amount < 0 else ""
    body = f"{abs(amount):,.2f}"
    if symbol:
        return f"{sign}{symbol}{body}"
    return f"{sign}{code} {body}"
