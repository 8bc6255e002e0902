import pytest
from datetime import datetime
from src.services.formatters import format_currency, format_date, parse_amount, parse_date


class TestParseAmount:
    @pytest.mark.parametrize("raw,expected", [
        ("100.50", 100.5),
        ("  42", 42.0),
        ("-3.25", -3.25),
        ("12.5 USD", 12.5),
        (".5", 0.5),
        ("1e3", 1000.0),
        (7, 7.0),
        (2.5, 2.5),
    ])
    def test_parses_leading_number(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", "$100", None, "n/a", float("nan"), float("inf"), True])
    def test_unparseable_is_none(self, raw):
        assert parse_amount(raw) is None


class TestParseDate:
    def test_iso_date(self):
        assert parse_date("2024-03-01") == datetime(2024, 3, 1)

    def test_written_date(self):
        assert parse_date("Jan 5, 2024") == datetime(2024, 1, 5)

    def test_aware_datetime_normalized_to_utc(self):
        assert parse_date("2024-01-01T10:00:00+02:00") == datetime(2024, 1, 1, 8, 0)

    def test_missing_day_defaults_to_first(self):
        assert parse_date("Sep 2003") == datetime(2003, 9, 1)

    @pytest.mark.parametrize("raw", ["March", "March 5", "10:30"])
    def test_date_without_year_is_none(self, raw):
        assert parse_date(raw) is None

    @pytest.mark.parametrize("raw", ["", "   ", "not a date", None])
    def test_unparseable_is_none(self, raw):
        assert parse_date(raw) is None


class TestFormatting:
    def test_format_date(self):
        assert format_date("2024-01-05") == "Jan 5, 2024"
        assert format_date("garbage") is None

    @pytest.mark.parametrize("amount,currency,expected", [
        (1234.5, "USD", "$1,234.50"),
        (0, "USD", "$0.00"),
        (-12, "EUR", "-€12.00"),
        (99.999, "GBP", "£100.00"),
        (10, "CHF", "CHF 10.00"),
        (10, "usd", "$10.00"),
    ])
    def test_format_currency(self, amount, currency, expected):
        assert format_currency(amount, currency) == expected
