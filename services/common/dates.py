"""
Date helpers for council collection dates.

The sites print dates like "Thursday 11th September 2025". Everything here works on
naive local dates/datetimes; the calendar event carries the timezone name separately.
"""

import calendar
import datetime
import re

import config
from services.common.errors import ParseError

MONTHS = {
    "January": 1,
    "February": 2,
    "March": 3,
    "April": 4,
    "May": 5,
    "June": 6,
    "July": 7,
    "August": 8,
    "September": 9,
    "October": 10,
    "November": 11,
    "December": 12,
}

# <Weekday> <day><ordinal suffix> <MonthName> <year>
COLLECTION_DATE_RE = re.compile(r"\w+\s+(\d{1,2})(?:st|nd|rd|th)\s+([A-Za-z]+)\s+(\d{4})")


def parse_collection_date(value: str) -> datetime.date | None:
    """
    Parse "Thursday 11th September 2025" into a date.
    Returns None when the text doesn't match (the ordinal suffix is required)
    or names an unknown month.
    """
    if not value:
        return None
    match = COLLECTION_DATE_RE.search(value)
    if not match:
        return None

    month = MONTHS.get(match.group(2))
    if month is None:
        return None

    try:
        return datetime.date(int(match.group(3)), month, int(match.group(1)))
    except ValueError:
        # e.g. "Monday 31st February 2025"
        return None


def require_collection_date(value: str) -> datetime.date:
    """Strict variant of parse_collection_date."""
    parsed = parse_collection_date(value)
    if parsed is None:
        raise ParseError(value)
    return parsed


def _ordinal_suffix(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def format_collection_date(value: datetime.date) -> str:
    """Inverse of parse_collection_date: date(2025, 9, 11) -> "Thursday 11th September 2025"."""
    return (
        f"{calendar.day_name[value.weekday()]} {value.day}{_ordinal_suffix(value.day)} "
        f"{calendar.month_name[value.month]} {value.year}"
    )


def _as_datetime(value: datetime.date) -> datetime.datetime:
    if isinstance(value, datetime.datetime):
        return value
    return datetime.datetime(value.year, value.month, value.day)


def subtract_days(value: datetime.date, days: int) -> datetime.datetime:
    return _as_datetime(value) - datetime.timedelta(days=days)


def set_time(value: datetime.date, hour: int, minute: int) -> datetime.datetime:
    return _as_datetime(value).replace(hour=hour, minute=minute, second=0, microsecond=0)


def add_months(value: datetime.date, months: int) -> datetime.datetime:
    """Add calendar months, clamping the day to the end of the target month."""
    result = _as_datetime(value)
    month_index = result.month - 1 + months
    year = result.year + month_index // 12
    month = month_index % 12 + 1
    day = min(result.day, calendar.monthrange(year, month)[1])
    return result.replace(year=year, month=month, day=day)


def reminder_window(collection_date: datetime.date) -> tuple[datetime.datetime, datetime.datetime]:
    """Reminder slot for a collection: the evening before, fixed length."""
    start = set_time(
        subtract_days(collection_date, 1),
        config.GOOGLE_CALENDAR_EVENT_START_HOUR,
        config.GOOGLE_CALENDAR_EVENT_START_MINUTE,
    )
    end = start + datetime.timedelta(minutes=config.GOOGLE_CALENDAR_EVENT_DURATION_MINUTES)
    return start, end
