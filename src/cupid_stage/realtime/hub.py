"""Process-local broadcast channels over live websocket connections."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class Connection(Protocol):
    """Anything that can push a JSON frame to a client."""

    async def send_json(self, data: Any) -> None: ...


def user_channel(user_id: int) -> str:
    """Return the personal channel name for a user."""
    return f"user_{user_id}"


def conversation_channel(conversation_id: int) -> str:
    """Return the broadcast channel name for a conversation."""
    return f"conversation_{conversation_id}"


class ConnectionHub:
    """Tracks live sessions and their channel memberships.

    A failed send drops the offending session and never propagates to the
    caller, so one broken socket cannot interrupt a broadcast.
    """

    def __init__(self) -> None:
        self._connections: dict[str, Connection] = {}
        self._channels: dict[str, set[str]] = defaultdict(set)
        self._memberships: dict[str, set[str]] = defaultdict(set)

    def attach(self, session_id: str, connection: Connection) -> None:
        self._connections[session_id] = connection

    def detach(self, session_id: str) -> None:
        """Forget a session and remove it from every channel."""
        self._connections.pop(session_id, None)
        for channel in self._memberships.pop(session_id, set()):
            members = self._channels.get(channel)
            if members is None:
                continue
            members.discard(session_id)
            if not members:
                del self._channels[channel]

    def join(self, session_id: str, channel: str) -> None:
        self._channels[channel].add(session_id)
        self._memberships[session_id].add(channel)

    def leave(self, session_id: str, channel: str) -> None:
        members = self._channels.get(channel)
        if members is not None:
            members.discard(session_id)
            if not members:
                del self._channels[channel]
        self._memberships.get(session_id, set()).discard(channel)

    def members(self, channel: str) -> set[str]:
        return set(self._channels.get(channel, ()))

    def is_connected(self, session_id: str) -> bool:
        return session_id in self._connections

    async def send(self, session_id: str, event: str, data: dict[str, Any]) -> bool:
        """Push one event to a single session; returns False if it could not be delivered."""
        connection = self._connections.get(session_id)
        if connection is None:
            return False
        try:
            await connection.send_json({"event": event, "data": data})
        except Exception as exc:  # noqa: BLE001
            logger.warning("Dropping session %s after failed %s send: %s", session_id, event, exc)
            self.detach(session_id)
            return False
        return True

    async def publish(
        self,
        channel: str,
        event: str,
        data: dict[str, Any],
        exclude: str | None = None,
    ) -> int:
        """Send an event to every session in ``channel`` except ``exclude``.

        Returns:
            How many sessions received the event.
        """
        delivered = 0
        for session_id in sorted(self.members(channel)):
            if session_id == exclude:
                continue
            if await self.send(session_id, event, data):
                delivered += 1
        return delivered
