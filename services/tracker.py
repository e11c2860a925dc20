"""Tracker session: the squad's users, the active user and snapshot sync."""

import asyncio
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, List, Optional, Union

from config.settings import settings
from schemas.calendar import CalendarMonth, ConsistencyMonth, LeaderboardRow
from schemas.enums import DayView, Theme
from schemas.user import Entry, EntryInput, User
from services.aggregates import (
    Counters,
    build_consistency_grid,
    build_year_calendar,
    recompute_counters,
    release_counters,
)
from services.entry_store import EntryStore
from services.leaderboard import rank
from services.snapshot import build_default_users
from services.sync_client import SyncClient
from utils.dates import to_date_key
from utils.exceptions import SyncFailure
from utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass
class SessionContext:
    """Per-session choices that survive between loads."""
    active_user_name: Optional[str] = None
    theme: Theme = field(default_factory=lambda: Theme(settings.default_theme))
    reference_year: int = field(default_factory=lambda: settings.reference_year)


class WorkoutTracker:
    """Holds the user list in memory and replicates it to the remote API.

    Local state is authoritative. Every save or delete schedules a snapshot
    upload; a newer upload cancels one still in flight and failures are
    logged and dropped.
    """

    def __init__(
        self,
        client: SyncClient,
        context: Optional[SessionContext] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.client = client
        self.context = context or SessionContext()
        self.clock = clock
        self.users: List[User] = build_default_users()
        self.loaded = False
        self._sync_task: Optional[asyncio.Task] = None

    # ---------------------------
    # Reference day
    # ---------------------------

    def reference_time(self) -> datetime:
        """Now, but never earlier than January 1 of the reference year."""
        now = self.clock()
        base = datetime(self.context.reference_year, 1, 1)
        return base if now < base else now

    def reference_key(self) -> str:
        return to_date_key(self.reference_time())

    # ---------------------------
    # Users
    # ---------------------------

    async def load(self) -> List[User]:
        """Load users from the remote API, keeping the defaults on failure."""
        try:
            users = await self.client.load_users()
            self.users = users or build_default_users()
        except SyncFailure as e:
            logger.error(f"Error loading users: {e}")
        self.loaded = True
        self._resolve_active_user()
        return self.users

    def _resolve_active_user(self) -> None:
        if not self.users:
            self.context.active_user_name = None
            return
        if self.find_user(self.context.active_user_name) is None:
            self.context.active_user_name = self.users[0].name

    def find_user(self, name: Optional[str]) -> Optional[User]:
        for user in self.users:
            if user.name == name:
                return user
        return None

    @property
    def active_user(self) -> User:
        return self.find_user(self.context.active_user_name) or self.users[0]

    def select_user(self, name: str) -> User:
        """Make ``name`` the active user.

        Raises:
            KeyError: if no user has that name.
        """
        user = self.find_user(name)
        if user is None:
            raise KeyError(f"Unknown user {name!r}")
        self.context.active_user_name = name
        return user

    def toggle_theme(self) -> Theme:
        self.context.theme = Theme.LIGHT if self.context.theme == Theme.DARK else Theme.DARK
        return self.context.theme

    # ---------------------------
    # Entries
    # ---------------------------

    def save_entry(self, date_key: str, data: Union[EntryInput, dict]) -> Entry:
        """Create or edit the active user's entry for ``date_key``."""
        user = self.active_user
        entry, was_new = EntryStore(user).upsert(date_key, data, self.reference_time())
        recompute_counters(Counters.from_user(user), was_new, entry.intensity).apply_to(user)
        logger.info(f"{'Logged' if was_new else 'Edited'} {date_key} for {user.name}")
        self._schedule_sync()
        return entry

    def delete_entry(self, date_key: str) -> Optional[Entry]:
        """Delete the active user's entry for ``date_key``; a missing day changes nothing."""
        user = self.active_user
        removed = EntryStore(user).remove(date_key)
        if removed is None:
            return None
        release_counters(Counters.from_user(user), removed.intensity).apply_to(user)
        logger.info(f"Deleted {date_key} for {user.name}")
        self._schedule_sync()
        return removed

    def entry_for(self, date_key: str, user: Optional[User] = None) -> Optional[Entry]:
        return EntryStore(user or self.active_user).lookup(date_key)

    def day_view(self, date_key: str) -> DayView:
        """Form for the reference day, details for a logged day, missed otherwise."""
        if date_key == self.reference_key():
            return DayView.FORM
        return DayView.DETAILS if self.entry_for(date_key) else DayView.MISSED

    # ---------------------------
    # Derived views
    # ---------------------------

    def leaderboard(self, year: Optional[int] = None) -> List[LeaderboardRow]:
        return rank(self.users, year or self.context.reference_year)

    def consistency(self, user: Optional[User] = None, year: Optional[int] = None) -> List[ConsistencyMonth]:
        store = EntryStore(user or self.active_user)
        return build_consistency_grid(store.completed_keys(), year or self.context.reference_year)

    def year_calendar(self) -> List[CalendarMonth]:
        return build_year_calendar(self.context.reference_year)

    def initial_month(self) -> date:
        """First day of the month the calendar opens on."""
        reference = self.reference_time()
        return date(reference.year, reference.month, 1)

    # ---------------------------
    # Sync
    # ---------------------------

    def _schedule_sync(self) -> None:
        if not self.loaded:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, snapshot not synced")
            return

        if self._sync_task is not None and not self._sync_task.done():
            self._sync_task.cancel()
        self._sync_task = loop.create_task(self._save_snapshot())

    async def _save_snapshot(self) -> None:
        try:
            await self.client.save_users(self.users)
        except SyncFailure as e:
            logger.error(f"Error saving users: {e}")
        except Exception as e:
            logger.error(f"Error saving users: {e}", exc_info=True)

    async def flush(self) -> None:
        """Wait for the pending snapshot upload, if any."""
        task = self._sync_task
        if task is None or task.done():
            return
        await asyncio.wait([task])
