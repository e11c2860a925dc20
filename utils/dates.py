"""Calendar day keys and date labels.

A day key is the local calendar date rendered as ``YYYY-MM-DD``. No timezone
conversion happens anywhere in here: naive datetimes are read as local time
and aware ones are read by their own calendar fields.
"""

import re
from datetime import date, datetime
from typing import Any, Union

from utils.exceptions import InvalidDateKey

DateLike = Union[date, datetime]

_KEY_PART = re.compile(r"[0-9]+")


def to_date_key(value: DateLike) -> str:
    """Format the calendar day of ``value`` as ``YYYY-MM-DD``."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def parse_date_key(key: Any) -> datetime:
    """Return local midnight of the day named by ``key``.

    Raises:
        InvalidDateKey: if ``key`` is not a string of three numeric parts
            naming a real calendar day.
    """
    if not isinstance(key, str):
        raise InvalidDateKey(key, "not a string")

    parts = key.split("-")
    if len(parts) != 3:
        raise InvalidDateKey(key, f"expected 3 parts, got {len(parts)}")
    if not all(_KEY_PART.fullmatch(part) for part in parts):
        raise InvalidDateKey(key, "non-numeric part")

    year, month, day = (int(part) for part in parts)
    try:
        return datetime(year, month, day)
    except ValueError as e:
        raise InvalidDateKey(key, str(e)) from e


def is_valid_date_key(key: Any) -> bool:
    """True when ``key`` parses to a real calendar day."""
    try:
        parse_date_key(key)
    except InvalidDateKey:
        return False
    return True


def start_of_day(value: DateLike) -> datetime:
    """Local midnight of the day ``value`` falls on."""
    return datetime(value.year, value.month, value.day)


def format_short_date(value: DateLike) -> str:
    """e.g. ``Mar 1``"""
    return f"{value.strftime('%b')} {value.day}"


def format_long_date(value: DateLike) -> str:
    """e.g. ``Sunday, March 1, 2026``"""
    return f"{value.strftime('%A')}, {value.strftime('%B')} {value.day}, {value.year}"
