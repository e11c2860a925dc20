"""User and workout entry schemas.

Field names on the wire are camelCase (``dateKey``) because the remote API
stores the documents as the web client sends them. Unknown fields are kept
so a load/save cycle writes them back unchanged.
"""

from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from schemas.enums import Intensity
from utils.dates import is_valid_date_key, parse_date_key, to_date_key
from utils.duration import normalize_duration


def coerce_time(value: Any) -> Optional[datetime]:
    """Read an entry time from epoch milliseconds, ISO-8601 text or a datetime.

    Aware values are converted to naive local time. Returns None when the
    value is missing or cannot be read.
    """
    parsed: Optional[datetime] = None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None

    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def to_utc_iso(value: datetime) -> str:
    """Render ``value`` as ISO-8601 UTC with milliseconds, e.g. ``2026-03-01T09:00:00.000Z``.

    Naive values are read as local time.
    """
    utc = value.astimezone(timezone.utc)
    return utc.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"


class Entry(BaseModel):
    """One logged workout; a user has at most one per calendar day."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    workout: str = Field("", description="Workout type, e.g. 'Run + core'")
    duration: str = Field("", description="Duration as HH:MM")
    intensity: str = Field(Intensity.FOCUSED.value, description="Intensity label")
    notes: str = Field("", description="Free-form notes")
    date_key: str = Field(..., alias="dateKey", description="Calendar day as YYYY-MM-DD")
    time: datetime = Field(..., description="When the workout was logged (local time)")

    @model_validator(mode="before")
    @classmethod
    def fill_time_and_key(cls, data: Any) -> Any:
        """Resolve ``time`` and ``dateKey`` from whichever of the two is usable."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        key = data.get("dateKey", data.get("date_key"))
        time = coerce_time(data.get("time"))

        if time is None:
            # raises InvalidDateKey when neither field is usable
            time = parse_date_key(key) if key is not None else datetime.now()
        if key is None or not is_valid_date_key(key):
            key = to_date_key(time)

        data.pop("date_key", None)
        data["dateKey"] = key
        data["time"] = time
        return data

    @field_serializer("time", when_used="json")
    def time_as_utc(self, value: datetime) -> str:
        """Send times as UTC with a ``Z`` suffix so the server reads the same instant."""
        return to_utc_iso(value)

    @field_validator("workout", "duration", "intensity", "notes", mode="before")
    @classmethod
    def none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def is_beast_mode(self) -> bool:
        return self.intensity == Intensity.BEAST_MODE.value


class EntryInput(BaseModel):
    """Form data for saving an entry."""

    workout: str = Field(..., description="Workout type")
    duration: str = Field("", description="Duration in any supported format")
    intensity: str = Field(Intensity.FOCUSED.value, description="Intensity label")
    notes: str = Field("", description="Free-form notes")

    @field_validator("workout", "notes", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value

    @field_validator("duration", mode="before")
    @classmethod
    def normalize(cls, value: Any) -> Any:
        if value is None:
            return ""
        return normalize_duration(value.strip()) if isinstance(value, str) else value

    @field_validator("intensity", mode="before")
    @classmethod
    def intensity_value(cls, value: Any) -> Any:
        if isinstance(value, Intensity):
            return value.value
        return value


class User(BaseModel):
    """A squad member with running counters and logged entries."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1, description="Unique user name")
    initials: str = Field("", description="Avatar initials")
    color: str = Field("", description="Avatar color token")
    vibe: str = Field("", description="Short training focus")
    total: int = Field(0, description="Entries created minus entries deleted")
    streak: int = Field(0, description="Running counter, see Counters")
    badges: int = Field(0, description="Beast mode entries created minus deleted")
    entries: List[Entry] = Field(default_factory=list, description="Logged workouts, newest first")

    @field_validator("total", "streak", "badges", mode="before")
    @classmethod
    def non_negative(cls, value: Any) -> Any:
        if value is None:
            return 0
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return max(0, int(value))
        return value
