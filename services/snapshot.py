"""Conversion between the remote user snapshot and User models."""

import copy
from typing import Any, Dict, Iterable, List

from pydantic import ValidationError

from config.defaults import DEFAULT_USERS
from schemas.user import Entry, User
from utils.logger import setup_logger

logger = setup_logger(__name__)


def build_default_users() -> List[User]:
    """Fresh copies of the seed users."""
    return [User.model_validate(copy.deepcopy(item)) for item in DEFAULT_USERS]


def normalize_entries(raw_entries: Any, owner: str) -> List[Entry]:
    """Validate a user's raw entries, skipping any that cannot be read."""
    if not isinstance(raw_entries, list):
        return []

    entries = []
    for raw in raw_entries:
        try:
            entries.append(Entry.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"Skipping unreadable entry for {owner}: {e.errors()[0]['msg']}, entry: {raw}")
    return entries


def normalize_users(items: Iterable[Any]) -> List[User]:
    """Turn the remote user list into User models.

    Entry times come from ``time`` (epoch milliseconds or ISO-8601), then from
    ``dateKey``, then default to now. Records without a name are skipped.
    """
    users = []
    for item in items:
        if not isinstance(item, dict) or not item.get("name"):
            logger.warning(f"Skipping user record without a name: {item!r}")
            continue

        data = {key: value for key, value in item.items() if key not in ("_id", "__v")}
        data["entries"] = normalize_entries(item.get("entries"), item["name"])
        try:
            users.append(User.model_validate(data))
        except ValidationError as e:
            logger.warning(f"Skipping invalid user {item['name']!r}: {e}")
    return users


def serialize_user(user: User) -> Dict[str, Any]:
    """JSON-ready dict of ``user`` with camelCase entry fields."""
    return user.model_dump(mode="json", by_alias=True)


def serialize_users(users: Iterable[User]) -> List[Dict[str, Any]]:
    return [serialize_user(user) for user in users]
