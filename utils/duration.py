"""Workout duration parsing.

Durations are stored as ``HH:MM`` strings capped at 23:59. Free-form input
such as ``"45"``, ``"1h 30m"`` or ``"1:05"`` is normalised on save.
"""

import re
from typing import Optional, Tuple

MAX_MINUTES = 23 * 60 + 59

_DIGITS = re.compile(r"\d+")
_NON_DIGITS = re.compile(r"\D")


def _to_int(value: str) -> Optional[int]:
    # blank text counts as 0
    value = value.strip()
    if not value:
        return 0
    try:
        return int(value)
    except ValueError:
        return None


def parse_duration_to_minutes(value: Optional[str]) -> int:
    """Convert a duration string to whole minutes; unparsable input is 0."""
    if not value or not isinstance(value, str):
        return 0
    trimmed = value.strip().lower()
    if not trimmed:
        return 0

    if ":" in trimmed:
        hours, minutes = trimmed.split(":")[:2]
        parsed_hours, parsed_minutes = _to_int(hours), _to_int(minutes)
        if parsed_hours is not None and parsed_minutes is not None:
            return parsed_hours * 60 + parsed_minutes

    digits = _DIGITS.findall(trimmed)
    if not digits:
        return 0
    if len(digits) >= 2:
        return int(digits[0]) * 60 + int(digits[1])
    return int(digits[0])


def format_duration(minutes: int) -> str:
    clamped = max(0, min(MAX_MINUTES, minutes))
    hours, mins = divmod(clamped, 60)
    return f"{hours:02d}:{mins:02d}"


def normalize_duration(value: Optional[str]) -> str:
    """Normalise any duration input to ``HH:MM``; empty input stays empty."""
    if not value:
        return ""
    return format_duration(parse_duration_to_minutes(value))


def parse_duration_parts(value: Optional[str]) -> Tuple[str, str]:
    """Split a stored duration into ``(hours, minutes)`` digit strings."""
    if not value:
        return "", ""
    if ":" in value:
        hours, minutes = value.split(":")[:2]
        return _NON_DIGITS.sub("", hours), _NON_DIGITS.sub("", minutes)

    digits = _DIGITS.findall(value)
    if not digits:
        return "", ""
    if len(digits) >= 2:
        return digits[0], digits[1]
    return "", digits[0]


def build_duration_value(hours: str, minutes: str) -> str:
    """Combine separate hour and minute inputs into ``HH:MM``.

    Hours are clamped to 0-23 and minutes to 0-59 before combining.
    """
    if hours == "" and minutes == "":
        return ""
    safe_hours = 0 if hours == "" else _to_int(hours)
    safe_minutes = 0 if minutes == "" else _to_int(minutes)
    if safe_hours is None or safe_minutes is None:
        return ""
    safe_hours = max(0, min(23, safe_hours))
    safe_minutes = max(0, min(59, safe_minutes))
    return format_duration(safe_hours * 60 + safe_minutes)
