"""Tests for date parser with relative dates."""

import pytest
from datetime import date, datetime, timedelta, UTC
from dateutil.relativedelta import relativedelta
from ledgerly.utils.date_parser import coerce_date, get_date_range, parse_date


def test_parse_absolute_date():
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_relative_dates():
    today = date.today()
    assert parse_date("today") == today
    assert parse_date(" Yesterday ") == today - timedelta(days=1)
    assert parse_date("this month") == today.replace(day=1)
    assert parse_date("this year") == date(today.year, 1, 1)
    assert parse_date("last year") == date(today.year - 1, 1, 1)


def test_parse_last_month():
    """'last month' is the first day of the previous month."""
    result = parse_date("last month")
    today = date.today()
    if today.month == 1:
        expected = date(today.year - 1, 12, 1)
    else:
        expected = date(today.year, today.month - 1, 1)
    assert result == expected


def test_parse_standard_formats():
    assert parse_date("January 15, 2024") == date(2024, 1, 15)
    assert parse_date("15/01/2024") == date(2024, 1, 15)


def test_parse_invalid_date():
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("last invalid")


class TestCoerceDate:
    """Tests for coerce_date."""

    def test_empty_values_return_default(self):
        assert coerce_date(None) is None
        assert coerce_date("") is None
        assert coerce_date(None, default=date(2024, 1, 1)) == date(2024, 1, 1)

    def test_datetime_is_truncated(self):
        assert coerce_date(datetime(2024, 3, 5, 23, 59, tzinfo=UTC)) == date(2024, 3, 5)

    def test_date_passes_through(self):
        assert coerce_date(date(2024, 3, 5)) == date(2024, 3, 5)

    def test_string_is_parsed(self):
        assert coerce_date("2024-03-05") == date(2024, 3, 5)

    def test_invalid_string_raises(self):
        with pytest.raises(ValueError):
            coerce_date("not a date")


def test_get_date_range_this_month():
    today = date.today()
    start, end = get_date_range("this-month")
    assert start == date(today.year, today.month, 1)
    assert end == today


def test_get_date_range_this_year():
    today = date.today()
    start, end = get_date_range("this-year")
    assert start == date(today.year, 1, 1)
    assert end == today


def test_get_date_range_last_month():
    today = date.today()
    start, end = get_date_range("last-month")
    expected_start = (today - relativedelta(months=1)).replace(day=1)
    expected_end = today.replace(day=1) - timedelta(days=1)
    assert start == expected_start
    assert end == expected_end
    assert end.month == expected_start.month


def test_get_date_range_last_year():
    today = date.today()
    start, end = get_date_range("last-year")
    assert start == date(today.year - 1, 1, 1)
    assert end == date(today.year - 1, 12, 31)


def test_get_date_range_invalid_period():
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("this-week")
