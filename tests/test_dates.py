"""
Tests for collection date parsing and the date helpers
"""
from datetime import date, datetime, timedelta

import pytest

from services.common.dates import (
    add_months,
    format_collection_date,
    parse_collection_date,
    reminder_window,
    require_collection_date,
    set_time,
    subtract_days,
)
from services.common.errors import ParseError


@pytest.mark.parametrize(
    "value,expected",
    [
        ("Thursday 11th September 2025", date(2025, 9, 11)),
        ("Monday 1st December 2025", date(2025, 12, 1)),
        ("Tuesday 2nd June 2026", date(2026, 6, 2)),
        ("Wednesday 23rd July 2025", date(2025, 7, 23)),
        ("  Friday 31st October 2025 ", date(2025, 10, 31)),
    ],
)
def test_parse_collection_date(value, expected):
    assert parse_collection_date(value) == expected


@pytest.mark.parametrize(
    "value",
    [
        "garbage",
        "",
        None,
        "Thursday 11th Septembre 2025",
        "Thursday 11th september 2025",
        "11/09/2025",
        "Monday 31st February 2025",
        "Thursday 11 September 2025",
        "Thursday 25 December 2025",
        "Thursday 11th September 25",
    ],
)
def test_parse_collection_date_returns_none(value):
    assert parse_collection_date(value) is None


def test_require_collection_date_raises_parse_error():
    with pytest.raises(ParseError) as exc_info:
        require_collection_date("No collection scheduled")
    assert exc_info.value.value == "No collection scheduled"


def test_format_collection_date_suffixes():
    assert format_collection_date(date(2025, 9, 11)) == "Thursday 11th September 2025"
    assert format_collection_date(date(2025, 9, 1)) == "Monday 1st September 2025"
    assert format_collection_date(date(2025, 9, 22)) == "Monday 22nd September 2025"
    assert format_collection_date(date(2025, 9, 13)) == "Saturday 13th September 2025"
    assert parse_collection_date(format_collection_date(date(2026, 2, 3))) == date(2026, 2, 3)


def test_subtract_days_crosses_month_boundary():
    assert subtract_days(date(2025, 3, 1), 1) == datetime(2025, 2, 28)


def test_set_time_resets_seconds():
    value = datetime(2025, 9, 10, 7, 15, 42, 123456)
    assert set_time(value, 20, 30) == datetime(2025, 9, 10, 20, 30)


def test_add_months_clamps_to_month_end():
    assert add_months(date(2025, 1, 31), 1) == datetime(2025, 2, 28)
    assert add_months(date(2025, 11, 15), 2) == datetime(2026, 1, 15)


def test_reminder_window_is_evening_before():
    start, end = reminder_window(date(2025, 9, 11))
    assert start == datetime(2025, 9, 10, 20, 30)
    assert end - start == timedelta(minutes=60)


def test_reminder_window_first_of_month():
    start, end = reminder_window(date(2026, 1, 1))
    assert start == datetime(2025, 12, 31, 20, 30)
    assert end == datetime(2025, 12, 31, 21, 30)
