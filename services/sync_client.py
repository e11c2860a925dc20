"""Client for the remote FitQuest API (user snapshot and squad chat)."""

from typing import Any, Dict, Iterable, List, Optional

import httpx

from config.settings import settings
from schemas.user import User
from services.snapshot import normalize_users, serialize_users
from utils.exceptions import SyncFailure
from utils.logger import setup_logger

logger = setup_logger(__name__)


class SyncClient:
    """Loads and saves the full user list and reads/writes chat messages.

    The server upserts users by name, so saving is a last-write-wins
    replacement of every user sent.
    """

    USERS_PATH = "/api/users"
    MESSAGES_PATH = "/api/messages"
    HEALTH_PATH = "/api/health"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.sync_timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
        )

    async def _request(self, operation: str, method: str, path: str, **kwargs) -> Any:
        try:
            async with self._client() as client:
                response = await client.request(method, path, **kwargs)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            raise SyncFailure(operation, e.response.text or str(e), e.response.status_code) from e
        except httpx.HTTPError as e:
            raise SyncFailure(operation, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise SyncFailure(operation, f"invalid JSON response: {e}") from e

    async def health(self) -> bool:
        data = await self._request("health check", "GET", self.HEALTH_PATH)
        return bool(isinstance(data, dict) and data.get("ok"))

    async def load_users(self) -> List[User]:
        """Fetch the user list.

        Raises:
            SyncFailure: if the request fails or the body is not a list.
        """
        data = await self._request("load users", "GET", self.USERS_PATH)
        if not isinstance(data, list):
            raise SyncFailure("load users", f"expected a list, got {type(data).__name__}")
        users = normalize_users(data)
        logger.info(f"Loaded {len(users)} users from {self.base_url}")
        return users

    async def save_users(self, users: Iterable[User]) -> List[User]:
        """Upsert every user and return the server's resulting list."""
        payload = {"users": serialize_users(users)}
        data = await self._request("save users", "PUT", self.USERS_PATH, json=payload)
        logger.info(f"Saved {len(payload['users'])} users to {self.base_url}")
        return normalize_users(data) if isinstance(data, list) else []

    async def fetch_messages(self) -> List[Dict[str, Any]]:
        """Raw chat messages, oldest first as the server returns them."""
        data = await self._request("fetch messages", "GET", self.MESSAGES_PATH)
        if not isinstance(data, list):
            raise SyncFailure("fetch messages", f"expected a list, got {type(data).__name__}")
        return data

    async def post_message(self, user: str, text: str) -> Dict[str, Any]:
        data = await self._request(
            "post message", "POST", self.MESSAGES_PATH, json={"user": user, "text": text}
        )
        if not isinstance(data, dict):
            raise SyncFailure("post message", f"expected an object, got {type(data).__name__}")
        return data
