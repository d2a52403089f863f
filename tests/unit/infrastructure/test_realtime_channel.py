"""Unit tests for the Supabase Realtime channel."""

import asyncio
import json
from typing import Any
from uuid import uuid4

import pytest
from websockets.exceptions import ConnectionClosedError

from core.exceptions import RemoteServiceError
from domain.entities.project import Project
from infrastructure.supabase.realtime import SupabaseRealtimeChannel

URL = "wss://demo.supabase.co/realtime/v1/websocket"
TOPIC = "realtime:projects_channel"


class FakeSocket:
    """Enough of a websockets client connection for the channel."""

    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []
        self.closed = False
        self._incoming: asyncio.Queue[str | None] = asyncio.Queue()

    async def send(self, data: str) -> None:
        self.sent.append(json.loads(data))

    async def close(self) -> None:
        self.closed = True
        self._incoming.put_nowait(None)

    def feed(self, message: dict[str, Any] | str) -> None:
        self._incoming.put_nowait(message if isinstance(message, str) else json.dumps(message))

    def __aiter__(self) -> "FakeSocket":
        return self

    async def __anext__(self) -> str:
        raw = await self._incoming.get()
        if raw is None:
            raise StopAsyncIteration
        return raw


def _record(**overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": str(uuid4()),
        "title": "Consilium",
        "link": "https://consilium.example.com",
        "image": "https://img.example.com/c.png",
        "rating": 0,
        "category": None,
        "user_id": str(uuid4()),
        "created_at": "2025-01-02T09:30:00.123456+00:00",
    }
    record.update(overrides)
    return record


def _insert(record: dict[str, Any], topic: str = TOPIC) -> dict[str, Any]:
    return {
        "topic": topic,
        "event": "postgres_changes",
        "payload": {
            "ids": [1],
            "data": {
                "schema": "public",
                "table": "projects",
                "type": "INSERT",
                "record": record,
                "columns": [],
                "errors": None,
                "commit_timestamp": "2025-01-02T09:30:00Z",
            },
        },
        "ref": None,
    }


@pytest.fixture
def socket() -> FakeSocket:
    return FakeSocket()


@pytest.fixture
def connected(socket: FakeSocket):
    urls: list[str] = []

    async def connect(url: str) -> FakeSocket:
        urls.append(url)
        return socket

    return connect, urls


@pytest.fixture
def channel(connected) -> SupabaseRealtimeChannel:
    connect, _ = connected
    return SupabaseRealtimeChannel(
        URL, "anon-key", "projects_channel", heartbeat_interval=3600, connect=connect
    )


class TestSubscribe:
    @pytest.mark.asyncio
    async def test_joins_topic_with_insert_filter(
        self, channel: SupabaseRealtimeChannel, socket: FakeSocket, connected
    ):
        _, urls = connected

        await channel.subscribe(lambda project: None)

        assert urls == [f"{URL}?apikey=anon-key&vsn=1.0.0"]
        join = socket.sent[0]
        assert join["topic"] == TOPIC
        assert join["event"] == "phx_join"
        assert join["ref"] == "1"
        assert join["payload"]["config"]["postgres_changes"] == [
            {"event": "INSERT", "schema": "public", "table": "projects"}
        ]
        assert join["payload"]["access_token"] == "anon-key"
        assert channel.is_open
        await channel.unsubscribe()

    @pytest.mark.asyncio
    async def test_join_reply_marks_joined(
        self, channel: SupabaseRealtimeChannel, socket: FakeSocket
    ):
        await channel.subscribe(lambda project: None)

        channel.handle_message(
            {"topic": TOPIC, "event": "phx_reply", "payload": {"status": "ok"}, "ref": "1"}
        )

        assert channel.joined
        await channel.unsubscribe()

    @pytest.mark.asyncio
    async def test_connection_failure_raises_remote_error(self):
        async def refuse(url: str) -> FakeSocket:
            raise ConnectionRefusedError("refused")

        channel = SupabaseRealtimeChannel(URL, "anon-key", "projects_channel", connect=refuse)

        with pytest.raises(RemoteServiceError):
            await channel.subscribe(lambda project: None)

        assert not channel.is_open

    @pytest.mark.asyncio
    async def test_closed_during_join_raises_remote_error(
        self, channel: SupabaseRealtimeChannel, socket: FakeSocket
    ):
        async def closed_send(data: str) -> None:
            raise ConnectionClosedError(None, None)

        socket.send = closed_send  # type: ignore[method-assign]

        with pytest.raises(RemoteServiceError):
            await channel.subscribe(lambda project: None)

        assert not channel.is_open
        assert socket.closed
        # nothing left to tear down
        await channel.unsubscribe()

    @pytest.mark.asyncio
    async def test_unsubscribe_leaves_and_closes(
        self, channel: SupabaseRealtimeChannel, socket: FakeSocket
    ):
        await channel.subscribe(lambda project: None)

        await channel.unsubscribe()

        assert socket.sent[-1]["event"] == "phx_leave"
        assert socket.sent[-1]["join_ref"] == "1"
        assert socket.closed
        assert not channel.is_open

    @pytest.mark.asyncio
    async def test_sends_heartbeats(self, socket: FakeSocket, connected):
        connect, _ = connected
        channel = SupabaseRealtimeChannel(
            URL, "anon-key", "projects_channel", heartbeat_interval=0.01, connect=connect
        )

        await channel.subscribe(lambda project: None)
        await asyncio.sleep(0.05)
        await channel.unsubscribe()

        heartbeats = [m for m in socket.sent if m["event"] == "heartbeat"]
        assert heartbeats
        assert heartbeats[0]["topic"] == "phoenix"


class TestInserts:
    @pytest.mark.asyncio
    async def test_pushed_row_reaches_listener(
        self, channel: SupabaseRealtimeChannel, socket: FakeSocket
    ):
        received: asyncio.Queue[Project] = asyncio.Queue()
        await channel.subscribe(received.put_nowait)
        record = _record()

        socket.feed(_insert(record))
        project = await asyncio.wait_for(received.get(), timeout=1)

        assert str(project.id) == record["id"]
        assert project.title == "Consilium"
        assert project.rating == 0
        await channel.unsubscribe()

    @pytest.mark.asyncio
    async def test_non_json_frames_are_skipped(
        self, channel: SupabaseRealtimeChannel, socket: FakeSocket
    ):
        received: asyncio.Queue[Project] = asyncio.Queue()
        await channel.subscribe(received.put_nowait)

        socket.feed("not json")
        socket.feed(_insert(_record()))

        await asyncio.wait_for(received.get(), timeout=1)
        await channel.unsubscribe()

    def test_legacy_insert_event(self, channel: SupabaseRealtimeChannel):
        received: list[Project] = []
        channel._listener = received.append

        channel.handle_message(
            {"topic": TOPIC, "event": "INSERT", "payload": {"record": _record()}, "ref": None}
        )

        assert len(received) == 1

    def test_other_topics_and_types_ignored(self, channel: SupabaseRealtimeChannel):
        received: list[Project] = []
        channel._listener = received.append
        update = _insert(_record())
        update["payload"]["data"]["type"] = "UPDATE"

        channel.handle_message(_insert(_record(), topic="realtime:other"))
        channel.handle_message(update)
        channel.handle_message({"topic": "phoenix", "event": "phx_reply", "payload": {}})

        assert received == []

    def test_malformed_row_dropped(self, channel: SupabaseRealtimeChannel):
        received: list[Project] = []
        channel._listener = received.append

        channel.handle_message(_insert(_record(id="not-a-uuid")))
        channel.handle_message(_insert({"title": "missing everything"}))
        channel.handle_message(_insert(_record()))

        assert len(received) == 1

    def test_channel_error_clears_joined(self, channel: SupabaseRealtimeChannel):
        channel.joined = True

        channel.handle_message({"topic": TOPIC, "event": "phx_error", "payload": {}})

        assert not channel.joined
