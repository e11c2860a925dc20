"""Yearly leaderboard."""

from typing import Iterable, List

from schemas.calendar import LeaderboardRow
from schemas.user import User


def year_count(user: User, year: int) -> int:
    """Number of entries whose day key falls in ``year``."""
    prefix = f"{year}-"
    return sum(1 for entry in user.entries if entry.date_key.startswith(prefix))


def rank(users: Iterable[User], year: int) -> List[LeaderboardRow]:
    """Order users by entries logged in ``year``, most first.

    ``sorted`` is stable, so users with equal counts keep their input order.
    """
    counted = [(user, year_count(user, year)) for user in users]
    ordered = sorted(counted, key=lambda item: item[1], reverse=True)
    return [
        LeaderboardRow(rank=position, user=user, year_count=count)
        for position, (user, count) in enumerate(ordered, start=1)
    ]
