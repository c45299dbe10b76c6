"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from typing import Optional, Union

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

DateLike = Union[date, datetime, str]


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports ISO and free-form absolute dates ("2024-01-15", "March 5, 2024")
    and a few relative forms used on the command line: "today", "yesterday",
    "this month", "last month", "this year", "last year".

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "this year": today.replace(month=1, day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return date_parser.isoparse(date_str).date()
    except ValueError:
        pass

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError, TypeError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def coerce_date(value: Optional[DateLike], default: Optional[date] = None) -> Optional[date]:
    """Coerce a date, datetime or date string into a date.

    Empty values return ``default``.

    Raises:
        ValueError: If a string value cannot be parsed
    """
    if value is None or value == "":
        return default
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date(str(value))


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a reporting period.

    Args:
        period: One of this-month, this-year, last-month, last-year

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return (today.replace(day=1), today)

    if period == "this-year":
        return (today.replace(month=1, day=1), today)

    if period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    if period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        end_date = today.replace(month=1, day=1) - timedelta(days=1)
        return (start_date, end_date)

    raise ValueError(
        f"Unknown period: '{period}'. Supported periods: this-month, this-year, last-month, last-year"
    )
