"""Enums for entry and calendar fields."""

from enum import Enum


class Intensity(str, Enum):
    """How hard a logged workout felt."""
    CHILL = "Chill"
    STEADY = "Steady"
    FOCUSED = "Focused"
    BEAST_MODE = "Beast mode"


class DayStatus(str, Enum):
    """Status of a calendar day relative to the reference day."""
    TODAY = "today"
    DONE = "done"
    MISSED = "missed"
    FUTURE = "future"


class DayView(str, Enum):
    """What opening a calendar day shows."""
    FORM = "form"
    DETAILS = "details"
    MISSED = "missed"


class Theme(str, Enum):
    DARK = "dark"
    LIGHT = "light"
