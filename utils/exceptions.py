"""Error taxonomy for the tracker core."""

from typing import Any, Optional


class FitQuestError(Exception):
    """Base class for tracker errors."""


class InvalidDateKey(FitQuestError, ValueError):
    """Raised when a string is not a valid ``YYYY-MM-DD`` calendar key."""

    def __init__(self, key: Any, reason: str = "expected YYYY-MM-DD"):
        self.key = key
        super().__init__(f"Invalid date key {key!r}: {reason}")


class EntryNotFound(FitQuestError, KeyError):
    """Raised by strict lookups when a user has no entry for a day."""

    def __init__(self, date_key: str, user: Optional[str] = None):
        self.date_key = date_key
        self.user = user
        owner = f" for {user}" if user else ""
        super().__init__(f"No entry{owner} on {date_key}")

    def __str__(self) -> str:
        return self.args[0]


class SyncFailure(FitQuestError):
    """Raised when the remote API cannot load or save data."""

    def __init__(self, operation: str, detail: str, status_code: Optional[int] = None):
        self.operation = operation
        self.detail = detail
        self.status_code = status_code
        status = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"{operation} failed{status}: {detail}")
