"""Calendar, consistency grid and leaderboard schemas."""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from schemas.user import User


class ConsistencyDay(BaseModel):
    """A day cell in the consistency grid."""
    day: date = Field(..., description="Calendar day")
    date_key: str = Field(..., description="Calendar day as YYYY-MM-DD")
    done: bool = Field(..., description="Whether a workout was logged on this day")


class ConsistencyMonth(BaseModel):
    """One month of the consistency grid as Monday-first weeks.

    Slots outside the month are None.
    """
    key: str = Field(..., description="Year and month, e.g. '2026-3'")
    label: str = Field(..., description="Short month name")
    weeks: List[List[Optional[ConsistencyDay]]] = Field(default_factory=list)

    @property
    def days(self) -> List[ConsistencyDay]:
        return [slot for week in self.weeks for slot in week if slot is not None]


class CalendarMonth(BaseModel):
    """One month of the user calendar, padded to start on a Monday."""
    label: str = Field(..., description="Full month name")
    days: List[Optional[date]] = Field(default_factory=list)


class LeaderboardRow(BaseModel):
    """A ranked user with the number of days logged in the ranking year."""
    rank: int = Field(..., description="1-based position")
    user: User
    year_count: int = Field(..., description="Entries logged in the ranking year")

    @property
    def name(self) -> str:
        return self.user.name
