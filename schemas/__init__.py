"""Schemas for users, entries, chat and derived views."""

from schemas.enums import DayStatus, DayView, Intensity, Theme
from schemas.user import Entry, EntryInput, User
from schemas.message import Message
from schemas.calendar import CalendarMonth, ConsistencyDay, ConsistencyMonth, LeaderboardRow

__all__ = [
    "DayStatus",
    "DayView",
    "Intensity",
    "Theme",
    "Entry",
    "EntryInput",
    "User",
    "Message",
    "CalendarMonth",
    "ConsistencyDay",
    "ConsistencyMonth",
    "LeaderboardRow",
]
