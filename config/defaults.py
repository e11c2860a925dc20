"""Seed data for a fresh squad."""

from typing import Any, Dict, List

# Used when the remote API has no users yet or cannot be reached
DEFAULT_USERS: List[Dict[str, Any]] = [
    {
        "name": "Jahnvi",
        "initials": "JA",
        "color": "coral",
        "vibe": "Strength + dance",
        "total": 0,
        "streak": 0,
        "badges": 0,
        "entries": [],
    },
    {
        "name": "Divesh",
        "initials": "DI",
        "color": "mint",
        "vibe": "Cardio + core",
        "total": 0,
        "streak": 0,
        "badges": 0,
        "entries": [],
    },
    {
        "name": "Paresh",
        "initials": "PA",
        "color": "sun",
        "vibe": "Mobility + strength",
        "total": 0,
        "streak": 0,
        "badges": 0,
        "entries": [],
    },
]
