"""Counters, consistency grid and calendar derived from a user's entries.

``streak`` is a running counter kept alongside ``total``: it goes up when a
day is logged for the first time and down when an entry is deleted. It is not
a consecutive-day streak.
"""

import calendar
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from schemas.calendar import CalendarMonth, ConsistencyDay, ConsistencyMonth
from schemas.enums import DayStatus, Intensity
from schemas.user import Entry, User
from utils.dates import start_of_day, to_date_key


@dataclass(frozen=True)
class Counters:
    total: int = 0
    streak: int = 0
    badges: int = 0

    @classmethod
    def from_user(cls, user: User) -> "Counters":
        return cls(total=user.total, streak=user.streak, badges=user.badges)

    def apply_to(self, user: User) -> User:
        user.total = self.total
        user.streak = self.streak
        user.badges = self.badges
        return user


def _is_beast_mode(intensity: str) -> bool:
    return intensity == Intensity.BEAST_MODE.value


def recompute_counters(counters: Counters, was_new: bool, intensity: str) -> Counters:
    """Counters after saving an entry. Edits leave every counter unchanged."""
    if not was_new:
        return counters
    return Counters(
        total=counters.total + 1,
        streak=counters.streak + 1,
        badges=counters.badges + (1 if _is_beast_mode(intensity) else 0),
    )


def release_counters(counters: Counters, intensity: str) -> Counters:
    """Counters after deleting an entry with ``intensity``, floored at zero."""
    return replace(
        counters,
        total=max(0, counters.total - 1),
        streak=max(0, counters.streak - 1),
        badges=max(0, counters.badges - (1 if _is_beast_mode(intensity) else 0)),
    )


def _weekday_offset(day: date) -> int:
    # Monday is 0
    return day.weekday()


def build_consistency_grid(
    completed: Iterable[Union[str, Entry]], year: int
) -> List[ConsistencyMonth]:
    """Lay out every day of ``year`` as Monday-first weeks, one list per month.

    ``completed`` holds the logged entries or their day keys.
    """
    done_keys = {item if isinstance(item, str) else item.date_key for item in completed}
    months: List[ConsistencyMonth] = []

    for month in range(1, 13):
        total_days = calendar.monthrange(year, month)[1]
        weeks: List[List[Optional[ConsistencyDay]]] = []
        week: List[Optional[ConsistencyDay]] = [None] * 7

        for day_number in range(1, total_days + 1):
            day = date(year, month, day_number)
            index = _weekday_offset(day)
            key = to_date_key(day)
            week[index] = ConsistencyDay(day=day, date_key=key, done=key in done_keys)
            if index == 6:
                weeks.append(week)
                week = [None] * 7

        if any(slot is not None for slot in week):
            weeks.append(week)

        months.append(ConsistencyMonth(
            key=f"{year}-{month}",
            label=date(year, month, 1).strftime("%b"),
            weeks=weeks,
        ))

    return months


def build_year_calendar(year: int) -> List[CalendarMonth]:
    """Days of each month of ``year``, led by None padding up to the first weekday."""
    months = []
    for month in range(1, 13):
        first_day = date(year, month, 1)
        total_days = calendar.monthrange(year, month)[1]
        days: List[Optional[date]] = [None] * _weekday_offset(first_day)
        days.extend(date(year, month, day) for day in range(1, total_days + 1))
        months.append(CalendarMonth(label=first_day.strftime("%B"), days=days))
    return months


def day_status(day: date, entry: Optional[Entry], reference_time: datetime) -> DayStatus:
    """Status of ``day`` for the calendar, seen from the reference day."""
    if to_date_key(day) == to_date_key(reference_time):
        return DayStatus.TODAY
    if entry is not None:
        return DayStatus.DONE
    if start_of_day(day) > start_of_day(reference_time):
        return DayStatus.FUTURE
    return DayStatus.MISSED
