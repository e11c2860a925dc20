"""Shared fixtures for tracker tests."""

import json
import time
from datetime import datetime
from typing import Any, Dict, List

import httpx
import pytest

from schemas.user import User
from services.sync_client import SyncClient
from services.tracker import SessionContext, WorkoutTracker

REFERENCE_NOW = datetime(2026, 3, 1, 18, 30)


class FakeRemoteApi:
    """In-memory stand-in for the remote users/messages API."""

    def __init__(self, users: List[Dict[str, Any]] = None, messages: List[Dict[str, Any]] = None):
        self.users = users if users is not None else []
        self.messages = messages if messages is not None else []
        self.saved_payloads: List[Dict[str, Any]] = []
        self.fail_with: int = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.fail_with:
            return httpx.Response(self.fail_with, json={"error": "Internal server error"})

        path = request.url.path
        if path == "/api/health":
            return httpx.Response(200, json={"ok": True})
        if path == "/api/users" and request.method == "GET":
            return httpx.Response(200, json=self.users)
        if path == "/api/users" and request.method == "PUT":
            payload = json.loads(request.content)
            self.saved_payloads.append(payload)
            by_name = {user["name"]: user for user in self.users}
            for user in payload["users"]:
                by_name[user["name"]] = {**by_name.get(user["name"], {}), **user}
            self.users = list(by_name.values())
            return httpx.Response(200, json=self.users)
        if path == "/api/messages" and request.method == "GET":
            return httpx.Response(200, json=self.messages)
        if path == "/api/messages" and request.method == "POST":
            body = json.loads(request.content)
            message = {
                "id": f"m{len(self.messages) + 1}",
                "user": body["user"],
                "text": body["text"],
                "time": "2026-03-01T18:00:00",
            }
            self.messages.append(message)
            return httpx.Response(201, json=message)
        return httpx.Response(404, json={"error": "Not found"})


@pytest.fixture
def remote() -> FakeRemoteApi:
    return FakeRemoteApi(users=[
        {"name": "Jahnvi", "initials": "JA", "color": "coral", "vibe": "Strength + dance",
         "total": 0, "streak": 0, "badges": 0, "entries": []},
        {"name": "Divesh", "initials": "DI", "color": "mint", "vibe": "Cardio + core",
         "total": 0, "streak": 0, "badges": 0, "entries": []},
    ])


@pytest.fixture
def client(remote: FakeRemoteApi) -> SyncClient:
    return SyncClient(base_url="http://fitquest.test", transport=httpx.MockTransport(remote.handler))


@pytest.fixture
def reference_now() -> datetime:
    return REFERENCE_NOW


@pytest.fixture
def tracker(client: SyncClient, reference_now: datetime) -> WorkoutTracker:
    return WorkoutTracker(client, SessionContext(reference_year=2026), clock=lambda: reference_now)


@pytest.fixture
def user() -> User:
    return User(name="Jahnvi", initials="JA", color="coral", vibe="Strength + dance")


@pytest.fixture
def kolkata_tz(monkeypatch):
    """Run the test with local time set to Asia/Kolkata (UTC+05:30)."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "Asia/Kolkata")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
