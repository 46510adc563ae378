"""Tests for current-time rounding and parsing of user supplied times."""

from datetime import datetime, timedelta

import pytest

from foliot.core.errors import ParseError
from foliot.core.timeparse import now, parse_span, parse_starting_value, parse_time_only


def local(year, month, day, hour=0, minute=0, second=0) -> datetime:
    return datetime(year, month, day, hour, minute, second).astimezone()


def test_now_is_minute_aligned_and_aware():
    value = now()
    assert value.second == 0
    assert value.microsecond == 0
    assert value.tzinfo is not None


@pytest.mark.parametrize(
    "text",
    ["2015-09-18T23:56:00", "18.09.2015-23:56", "18.09.2015 23:56"],
)
def test_parse_full_datetimes(text):
    assert parse_starting_value(text) == local(2015, 9, 18, 23, 56)


def test_parse_full_datetime_keeps_seconds():
    assert parse_starting_value("2015-09-18T23:56:04") == local(2015, 9, 18, 23, 56, 4)


def test_parsed_values_are_aware():
    assert parse_starting_value("18.09.2015 23:56").utcoffset() is not None


@pytest.mark.parametrize("text", ["9:30", "09:30", "09:30h", "0930", "0930h"])
def test_time_only_formats(text):
    current = local(2024, 1, 10, 10, 0)
    assert parse_time_only(text, current) == local(2024, 1, 10, 9, 30)


def test_time_before_now_is_today():
    current = local(2024, 1, 10, 10, 0)
    assert parse_starting_value("9:30", current) == local(2024, 1, 10, 9, 30)


def test_time_after_now_is_yesterday():
    current = local(2024, 1, 10, 9, 0)
    assert parse_starting_value("9:30", current) == local(2024, 1, 9, 9, 30)


def test_time_equal_to_now_is_yesterday():
    current = local(2024, 3, 1, 9, 30)
    assert parse_time_only("09:30", current) == local(2024, 2, 29, 9, 30)


@pytest.mark.parametrize("text", ["", "tomorrow", "25:00", "2015-09-18", "9.30"])
def test_unparseable_values_name_the_input(text):
    with pytest.raises(ParseError) as exc_info:
        parse_starting_value(text)
    assert exc_info.value.text == text
    assert f"'{text}'" in str(exc_info.value)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1.5", timedelta(minutes=90)),
        ("2", timedelta(hours=2)),
        ("2h", timedelta(hours=2)),
        ("90m", timedelta(minutes=90)),
        (".25", timedelta(minutes=15)),
        ("0.33", timedelta(minutes=19)),
    ],
)
def test_parse_span(text, expected):
    assert parse_span(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "-1", "1.5d"])
def test_parse_span_rejects_garbage(text):
    with pytest.raises(ParseError):
        parse_span(text)
