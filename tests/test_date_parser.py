"""Tests for date parser with relative dates."""

import pytest
from datetime import date, datetime, timedelta
from dateutil.relativedelta import relativedelta
from fundplan.utils.date_parser import parse_date, to_calendar_date


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    result = parse_date("2024-01-15")
    assert result == date(2024, 1, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today") == date.today()
    assert parse_date("  Today ") == date.today()


def test_parse_yesterday_and_tomorrow():
    assert parse_date("yesterday") == date.today() - timedelta(days=1)
    assert parse_date("tomorrow") == date.today() + timedelta(days=1)


def test_parse_next_month():
    """Test parsing 'next month' as the first day of next month."""
    today = date.today()
    assert parse_date("next month") == (today + relativedelta(months=1)).replace(day=1)


def test_parse_next_year():
    today = date.today()
    assert parse_date("next year") == date(today.year + 1, 1, 1)


def test_parse_next_week():
    """Test parsing 'next week' as Monday of next week."""
    result = parse_date("next week")
    assert result.weekday() == 0
    assert 0 < (result - date.today()).days <= 7


def test_parse_next_weekday():
    result = parse_date("next friday")
    assert result.weekday() == 4
    assert 0 < (result - date.today()).days <= 7


def test_parse_last_month():
    """Test parsing 'last month'."""
    result = parse_date("last month")
    # Should be first day of last month
    today = date.today()
    if today.month == 1:
        expected = date(today.year - 1, 12, 1)
    else:
        expected = date(today.year, today.month - 1, 1)
    assert result == expected


def test_parse_this_month():
    """Test parsing 'this month'."""
    result = parse_date("this month")
    today = date.today()
    assert result == date(today.year, today.month, 1)


def test_parse_invalid_relative():
    """Test parsing invalid relative date."""
    with pytest.raises(ValueError):
        parse_date("last invalid")


def test_parse_standard_formats():
    """Test parsing various standard date formats."""
    # These should all work via dateutil parser
    assert parse_date("January 15, 2024") == date(2024, 1, 15)
    assert parse_date("15/01/2024") == date(2024, 1, 15)


def test_to_calendar_date_drops_time():
    assert to_calendar_date(datetime(2024, 3, 1, 23, 59)) == date(2024, 3, 1)
    assert to_calendar_date(date(2024, 3, 1)) == date(2024, 3, 1)
    assert to_calendar_date("2024-03-01T10:00:00.000Z") == date(2024, 3, 1)


def test_to_calendar_date_invalid():
    with pytest.raises(ValueError):
        to_calendar_date("not a date")
