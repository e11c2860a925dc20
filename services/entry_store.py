"""Per-user workout entries keyed by calendar day."""

from datetime import datetime
from typing import Iterator, List, Optional, Set, Tuple, Union

from schemas.user import Entry, EntryInput, User
from utils.dates import parse_date_key, to_date_key
from utils.exceptions import EntryNotFound
from utils.logger import setup_logger

logger = setup_logger(__name__)


class EntryStore:
    """Day-keyed view over a user's entry list.

    The store edits ``user.entries`` in place and keeps at most one entry per
    day key. New entries go to the front of the list.
    """

    def __init__(self, user: User):
        self.user = user

    @property
    def entries(self) -> List[Entry]:
        return self.user.entries

    def _index_of(self, date_key: str) -> int:
        for index, entry in enumerate(self.entries):
            if entry.date_key == date_key:
                return index
        return -1

    def lookup(self, date_key: str) -> Optional[Entry]:
        """Return the entry logged on ``date_key``, if any."""
        index = self._index_of(date_key)
        return self.entries[index] if index >= 0 else None

    def get(self, date_key: str) -> Entry:
        """Like lookup, but raise EntryNotFound when the day is empty."""
        entry = self.lookup(date_key)
        if entry is None:
            raise EntryNotFound(date_key, self.user.name)
        return entry

    def upsert(
        self,
        date_key: str,
        data: Union[EntryInput, dict],
        reference_time: datetime,
    ) -> Tuple[Entry, bool]:
        """Create or replace the entry for ``date_key``.

        Saving on the reference day stamps ``reference_time``; any other day is
        stamped with its local midnight.

        Returns:
            The stored entry and whether it was newly created.

        Raises:
            InvalidDateKey: if ``date_key`` is malformed.
        """
        entry_date = parse_date_key(date_key)
        if not isinstance(data, EntryInput):
            data = EntryInput.model_validate(data)

        time = reference_time if date_key == to_date_key(reference_time) else entry_date
        entry = Entry(
            workout=data.workout,
            duration=data.duration,
            intensity=data.intensity,
            notes=data.notes,
            dateKey=date_key,
            time=time,
        )

        index = self._index_of(date_key)
        if index >= 0:
            self.entries[index] = entry
            logger.debug(f"Updated entry {date_key} for {self.user.name}")
            return entry, False

        self.entries.insert(0, entry)
        logger.debug(f"Created entry {date_key} for {self.user.name}")
        return entry, True

    def remove(self, date_key: str) -> Optional[Entry]:
        """Delete and return the entry for ``date_key``; absent days are a no-op."""
        index = self._index_of(date_key)
        if index < 0:
            logger.debug(f"No entry {date_key} for {self.user.name}, nothing to delete")
            return None
        return self.entries.pop(index)

    def completed_keys(self) -> Set[str]:
        return {entry.date_key for entry in self.entries}

    def __contains__(self, date_key: object) -> bool:
        return isinstance(date_key, str) and self._index_of(date_key) >= 0

    def __iter__(self) -> Iterator[Entry]:
        return iter(list(self.entries))

    def __len__(self) -> int:
        return len(self.entries)
