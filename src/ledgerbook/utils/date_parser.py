"""Date and posting-month parsing utilities."""

import calendar
import re
from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

MONTH_PATTERN = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats

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
        "tomorrow": today + timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "next month": (today + relativedelta(months=1)).replace(day=1),
        "this year": today.replace(month=1, day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    Args:
        period: Period string (this-month, this-year, last-month, last-year)

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return (today.replace(day=1), today)

    elif period == "this-year":
        return (today.replace(month=1, day=1), today)

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        # Day before first day of current month
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        end_date = today.replace(month=1, day=1) - timedelta(days=1)
        return (start_date, end_date)

    else:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: this-month, this-year, last-month, last-year"
        )


def parse_month(month_str: str) -> date:
    """Parse a "YYYY-MM" posting month into the first day of that month.

    Raises:
        ValueError: If the string is not a valid "YYYY-MM" month
    """
    match = MONTH_PATTERN.match(month_str.strip()) if month_str else None
    if match is None:
        raise ValueError(f"Invalid month '{month_str}': expected YYYY-MM")
    return date(int(match.group(1)), int(match.group(2)), 1)


def format_month(value: date) -> str:
    return value.strftime("%Y-%m")


def last_day_of_month(month_str: str) -> date:
    """Return the last calendar day of a "YYYY-MM" month."""
    first = parse_month(month_str)
    return first.replace(day=calendar.monthrange(first.year, first.month)[1])


def months_in_range(date_from: date, date_to: date) -> list[str]:
    """List every "YYYY-MM" month from ``date_from``'s month to ``date_to``'s, inclusive."""
    months = []
    current = date_from.replace(day=1)
    end = date_to.replace(day=1)
    while current <= end:
        months.append(format_month(current))
        current += relativedelta(months=1)
    return months
