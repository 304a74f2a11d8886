"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from ledgerit.domain.calendar_math import add_months, days_in_month

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
PERIODS = (
    "this-month",
    "last-month",
    "next-month",
    "this-year",
    "last-year",
    "this-week",
    "last-week",
)


def _month_start(value: date) -> date:
    return value.replace(day=1)


def _month_end(value: date) -> date:
    return value.replace(day=days_in_month(value.year, value.month))


def parse_iso_date(date_str: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` date.

    Raises:
        ValueError: If the string is not an ISO calendar date
    """
    try:
        return date.fromisoformat(date_str.strip())
    except (ValueError, AttributeError):
        raise ValueError(f"Invalid date '{date_str}', expected YYYY-MM-DD")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Accepts ISO dates, anything python-dateutil understands ("March 5,
    2025") and a few relative words:
    - "today", "yesterday", "tomorrow"
    - "this/last/next month" and "this/last/next year" (first day of the period)
    - "this/last/next week" (Monday of the week)
    - "last monday" .. "last sunday"

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = date.today()

    fixed = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in fixed:
        return fixed[text]

    words = text.split(" ")
    if len(words) == 2 and words[0] in ("last", "this", "next"):
        step = {"last": -1, "this": 0, "next": 1}[words[0]]
        period = words[1]
        if period == "month":
            return _month_start(add_months(today, step))
        if period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=step)
        if period == "week":
            return today - timedelta(days=today.weekday()) + timedelta(weeks=step)
        if period in WEEKDAYS and step == -1:
            days_ago = (today.weekday() - WEEKDAYS.index(period)) % 7 or 7
            return today - timedelta(days=days_ago)

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get the full start and end dates of a named period.

    Windows cover whole periods so scheduled transactions later in the
    period are included.

    Args:
        period: One of this-month, last-month, next-month, this-year,
            last-year, this-week, last-week

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period in ("this-month", "last-month", "next-month"):
        offset = {"this-month": 0, "last-month": -1, "next-month": 1}[period]
        anchor = add_months(today, offset)
        return (_month_start(anchor), _month_end(anchor))

    if period in ("this-year", "last-year"):
        year = today.year if period == "this-year" else today.year - 1
        return (date(year, 1, 1), date(year, 12, 31))

    if period in ("this-week", "last-week"):
        monday = today - timedelta(days=today.weekday())
        if period == "last-week":
            monday -= timedelta(weeks=1)
        return (monday, monday + timedelta(days=6))

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
