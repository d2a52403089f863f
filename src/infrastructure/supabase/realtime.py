"""Supabase Realtime channel over websockets.

Speaks the Phoenix v1 JSON protocol: join ``realtime:<channel>`` with a
``postgres_changes`` filter, keep the socket alive with heartbeats on the
``phoenix`` topic, and turn each INSERT into a ``Project``. There is no
reconnect: once the socket closes the channel stays quiet.
"""

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable
from urllib.parse import urlencode

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from core.config import settings
from core.exceptions import RemoteServiceError
from domain.repositories.realtime_channel import ProjectListener
from infrastructure.supabase.records import project_from_record

logger = logging.getLogger(__name__)

Connector = Callable[[str], Awaitable[Any]]


class SupabaseRealtimeChannel:
    """Subscription to INSERT events on one table."""

    def __init__(
        self,
        url: str,
        api_key: str,
        name: str,
        *,
        table: str = "projects",
        schema: str = "public",
        access_token: str | None = None,
        heartbeat_interval: float = settings.realtime_heartbeat_seconds,
        connect: Connector = websockets.connect,
    ) -> None:
        self._url = url
        self._api_key = api_key
        self._name = name
        self._table = table
        self._schema = schema
        self._access_token = access_token
        self._heartbeat_interval = heartbeat_interval
        self._connect = connect
        self._socket: Any = None
        self._listener: ProjectListener | None = None
        self._tasks: list[asyncio.Task[None]] = []
        self._ref = 0
        self._join_ref: str | None = None
        self.joined = False

    @property
    def topic(self) -> str:
        return f"realtime:{self._name}"

    @property
    def is_open(self) -> bool:
        return self._socket is not None

    async def subscribe(self, listener: ProjectListener) -> None:
        if self._socket is not None:
            return

        endpoint = f"{self._url}?{urlencode({'apikey': self._api_key, 'vsn': '1.0.0'})}"
        try:
            self._socket = await self._connect(endpoint)
        except (OSError, WebSocketException) as exc:
            logger.warning("Realtime connection to %s failed: %s", self._url, exc)
            raise RemoteServiceError(f"Could not open realtime channel {self._name}") from exc

        self._listener = listener
        try:
            self._join_ref = await self._send(self.topic, "phx_join", self._join_payload())
        except (ConnectionClosed, WebSocketException) as exc:
            logger.warning("Join of %s failed: %s", self.topic, exc)
            socket, self._socket = self._socket, None
            self._listener = None
            await socket.close()
            raise RemoteServiceError(f"Could not open realtime channel {self._name}") from exc

        self._tasks = [
            asyncio.create_task(self._read_loop()),
            asyncio.create_task(self._heartbeat_loop()),
        ]

    async def unsubscribe(self) -> None:
        if self._socket is None:
            return

        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []

        socket, self._socket = self._socket, None
        try:
            await self._send_on(socket, self.topic, "phx_leave", {})
        except ConnectionClosed:
            pass
        await socket.close()
        self._listener = None
        self.joined = False

    def handle_message(self, message: dict[str, Any]) -> None:
        """Route one decoded frame."""
        if message.get("topic") != self.topic:
            return

        event = message.get("event")
        payload = message.get("payload") or {}

        if event == "phx_reply":
            if message.get("ref") == self._join_ref:
                self.joined = payload.get("status") == "ok"
                if not self.joined:
                    logger.warning("Join of %s rejected: %s", self.topic, payload.get("response"))
            return
        if event in ("phx_error", "phx_close"):
            logger.warning("Realtime channel %s reported %s", self.topic, event)
            self.joined = False
            return

        if event == "postgres_changes":
            data = payload.get("data") or {}
            if data.get("type") != "INSERT":
                return
            record = data.get("record")
        elif event == "INSERT":
            record = payload.get("record")
        else:
            return

        try:
            project = project_from_record(record)
        except (KeyError, TypeError, ValueError):
            logger.warning("Dropping malformed %s row from %s", self._table, self.topic)
            return

        if self._listener is not None:
            self._listener(project)

    def _join_payload(self) -> dict[str, Any]:
        return {
            "config": {
                "broadcast": {"ack": False, "self": False},
                "presence": {"key": ""},
                "postgres_changes": [
                    {"event": "INSERT", "schema": self._schema, "table": self._table}
                ],
            },
            "access_token": self._access_token or self._api_key,
        }

    async def _read_loop(self) -> None:
        try:
            async for raw in self._socket:
                try:
                    message = json.loads(raw)
                except ValueError:
                    logger.warning("Ignoring non-JSON frame on %s", self.topic)
                    continue
                if isinstance(message, dict):
                    self.handle_message(message)
        except ConnectionClosed as exc:
            logger.warning("Realtime socket for %s closed: %s", self.topic, exc)
        self.joined = False

    async def _heartbeat_loop(self) -> None:
        while True:
            await asyncio.sleep(self._heartbeat_interval)
            try:
                await self._send("phoenix", "heartbeat", {})
            except ConnectionClosed:
                return

    async def _send(self, topic: str, event: str, payload: dict[str, Any]) -> str:
        return await self._send_on(self._socket, topic, event, payload)

    async def _send_on(self, socket: Any, topic: str, event: str, payload: dict[str, Any]) -> str:
        self._ref += 1
        ref = str(self._ref)
        frame = {"topic": topic, "event": event, "payload": payload, "ref": ref}
        if topic == self.topic and self._join_ref is not None:
            frame["join_ref"] = self._join_ref
        await socket.send(json.dumps(frame))
        return ref
