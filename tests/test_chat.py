"""Tests for the squad chat feed."""

import asyncio
from datetime import datetime, timedelta

import httpx
import pytest

from services.chat import ChatFeed, filter_recent, normalize_message, sort_by_time
from services.sync_client import SyncClient

NOW = datetime(2026, 3, 1, 18, 30)
WEEK = 7 * 24 * 60 * 60


def test_normalize_message_reads_alternate_fields():
    message = normalize_message({"_id": "abc", "user": "Paresh", "text": "hi", "createdAt": "2026-03-01T10:00:00"}, NOW)
    assert message.id == "abc"
    assert message.time == datetime(2026, 3, 1, 10)


def test_normalize_message_fills_missing_fields():
    message = normalize_message({}, NOW)
    assert message.user == "Unknown"
    assert message.text == ""
    assert message.time == NOW
    assert message.id


def test_filter_recent_drops_expired_messages():
    fresh = normalize_message({"id": "1", "time": (NOW - timedelta(days=6)).isoformat()}, NOW)
    expired = normalize_message({"id": "2", "time": (NOW - timedelta(days=8)).isoformat()}, NOW)
    assert filter_recent([fresh, expired], NOW, WEEK) == [fresh]


def test_sort_by_time_is_ascending():
    late = normalize_message({"id": "late", "time": "2026-03-01T12:00:00"}, NOW)
    early = normalize_message({"id": "early", "time": "2026-03-01T08:00:00"}, NOW)
    assert [m.id for m in sort_by_time([late, early])] == ["early", "late"]


async def test_refresh_loads_recent_messages_in_order(client, remote):
    remote.messages = [
        {"id": "b", "user": "Divesh", "text": "second", "time": "2026-03-01T12:00:00"},
        {"id": "a", "user": "Jahnvi", "text": "first", "time": "2026-03-01T08:00:00"},
        {"id": "old", "user": "Jahnvi", "text": "stale", "time": "2026-02-01T08:00:00"},
    ]
    feed = ChatFeed(client, clock=lambda: NOW)

    messages = await feed.refresh()

    assert [m.id for m in messages] == ["a", "b"]


async def test_refresh_keeps_list_when_nothing_changed(client, remote):
    remote.messages = [{"id": "a", "user": "Jahnvi", "text": "hi", "time": "2026-03-01T08:00:00"}]
    feed = ChatFeed(client, clock=lambda: NOW)

    first = await feed.refresh()
    second = await feed.refresh()

    assert second is first


async def test_refresh_failure_keeps_current_feed(client, remote):
    remote.messages = [{"id": "a", "user": "Jahnvi", "text": "hi", "time": "2026-03-01T08:00:00"}]
    feed = ChatFeed(client, clock=lambda: NOW)
    await feed.refresh()

    remote.fail_with = 503
    messages = await feed.refresh()

    assert [m.id for m in messages] == ["a"]


async def test_send_trims_and_merges(client, remote):
    feed = ChatFeed(client, clock=lambda: NOW)

    saved = await feed.send(" Divesh ", "  Leg day done  ")

    assert saved.user == "Divesh"
    assert saved.text == "Leg day done"
    assert feed.messages == [saved]
    assert remote.messages[-1]["user"] == "Divesh"


@pytest.mark.parametrize("user,text", [("", "hi"), ("Divesh", "   "), (None, None)])
async def test_send_rejects_blank_input(client, remote, user, text):
    feed = ChatFeed(client, clock=lambda: NOW)
    with pytest.raises(ValueError):
        await feed.send(user, text)
    assert remote.messages == []


async def test_poll_stops_when_asked(remote):
    calls = []

    def handler(request):
        calls.append(request.url.path)
        return httpx.Response(200, json=[])

    feed = ChatFeed(SyncClient(base_url="http://fitquest.test", transport=httpx.MockTransport(handler)))
    stop = asyncio.Event()
    task = asyncio.create_task(feed.poll(stop, interval=0.01))
    await asyncio.sleep(0.05)
    stop.set()
    await asyncio.wait_for(task, timeout=1)

    assert len(calls) >= 2
