"""Tests for day keys and date labels."""

from datetime import date, datetime, timedelta

import pytest

from utils.dates import (
    format_long_date,
    format_short_date,
    is_valid_date_key,
    parse_date_key,
    start_of_day,
    to_date_key,
)
from utils.exceptions import InvalidDateKey


def test_to_date_key_zero_pads():
    assert to_date_key(date(2026, 3, 1)) == "2026-03-01"
    assert to_date_key(datetime(2026, 12, 31, 23, 59)) == "2026-12-31"


def test_parse_date_key_returns_local_midnight():
    assert parse_date_key("2026-03-01") == datetime(2026, 3, 1)


def test_every_day_of_a_leap_year_round_trips():
    day = datetime(2028, 1, 1, 13, 45, 12)
    while day.year == 2028:
        assert parse_date_key(to_date_key(day)) == start_of_day(day)
        day += timedelta(days=1)


def test_parse_accepts_unpadded_parts():
    assert parse_date_key("2026-3-1") == datetime(2026, 3, 1)


@pytest.mark.parametrize("key", [
    "2026-03",
    "2026-03-01-02",
    "abcd-01-01",
    "2026-0x-01",
    "2026-02-30",
    "2026-13-01",
    "",
    " 2026-03-01",
    None,
    20260301,
])
def test_malformed_keys_raise(key):
    with pytest.raises(InvalidDateKey) as excinfo:
        parse_date_key(key)
    assert excinfo.value.key == key
    assert not is_valid_date_key(key)


def test_invalid_date_key_is_a_value_error():
    with pytest.raises(ValueError):
        parse_date_key("nope")


def test_labels():
    day = date(2026, 3, 1)
    assert format_short_date(day) == "Mar 1"
    assert format_long_date(day) == "Sunday, March 1, 2026"
