"""Squad chat feed backed by the remote API."""

import asyncio
import uuid
from datetime import datetime, timedelta
from typing import Any, Callable, Iterable, List, Optional

from config.settings import settings
from schemas.message import Message
from schemas.user import coerce_time
from services.sync_client import SyncClient
from utils.exceptions import SyncFailure
from utils.logger import setup_logger

logger = setup_logger(__name__)


def normalize_message(item: Any, now: Optional[datetime] = None) -> Message:
    """Build a Message from a raw API item, filling in anything missing."""
    item = item if isinstance(item, dict) else {}
    raw_time = item.get("time") or item.get("createdAt") or item.get("created_at")
    time = coerce_time(raw_time) or now or datetime.now()
    message_id = item.get("id") or item.get("_id") or f"{int(time.timestamp() * 1000)}-{uuid.uuid4().hex[:8]}"
    return Message(
        id=str(message_id),
        user=item.get("user") or "Unknown",
        text=item.get("text") or "",
        time=time,
    )


def filter_recent(messages: Iterable[Message], now: datetime, ttl_seconds: int) -> List[Message]:
    """Drop messages older than the retention window."""
    window = timedelta(seconds=ttl_seconds)
    return [message for message in messages if now - message.time <= window]


def sort_by_time(messages: Iterable[Message]) -> List[Message]:
    return sorted(messages, key=lambda message: message.time)


class ChatFeed:
    """Recent chat messages, oldest first."""

    def __init__(
        self,
        client: SyncClient,
        ttl_seconds: Optional[int] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.client = client
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.message_ttl_seconds
        self.clock = clock
        self.messages: List[Message] = []

    def _merge(self, messages: Iterable[Message]) -> List[Message]:
        now = self.clock()
        return sort_by_time(filter_recent(messages, now, self.ttl_seconds))

    async def refresh(self) -> List[Message]:
        """Reload the feed; on failure keep the current messages."""
        try:
            raw = await self.client.fetch_messages()
        except SyncFailure as e:
            logger.error(f"Error loading messages: {e}")
            return self.messages

        now = self.clock()
        fresh = self._merge(normalize_message(item, now) for item in raw)
        if [m.id for m in fresh] != [m.id for m in self.messages]:
            self.messages = fresh
        return self.messages

    async def send(self, user: str, text: str) -> Message:
        """Post a message and add it to the feed.

        Raises:
            ValueError: if the sender or text is blank.
            SyncFailure: if the server rejects the message.
        """
        user = (user or "").strip()
        text = (text or "").strip()
        if not user or not text:
            raise ValueError("User and text are required")

        saved = normalize_message(await self.client.post_message(user, text), self.clock())
        self.messages = self._merge([*self.messages, saved])
        return saved

    async def poll(self, stop: asyncio.Event, interval: Optional[float] = None) -> None:
        """Refresh the feed every ``interval`` seconds until ``stop`` is set."""
        interval = interval if interval is not None else settings.chat_poll_interval
        while not stop.is_set():
            await self.refresh()
            try:
                await asyncio.wait_for(stop.wait(), timeout=interval)
            except asyncio.TimeoutError:
                continue
