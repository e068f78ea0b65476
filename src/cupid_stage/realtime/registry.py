"""Session registries mapping a user id to their active transport session.

Last connection wins: registering a new session for a user replaces the
previous entry. Unregistering only removes the entry while it still points
at the disconnecting session, so a late disconnect cannot clobber a newer one.
"""

from __future__ import annotations

import abc
import logging
from typing import Any

import redis.asyncio as redis

from cupid_stage.core.settings import Settings

logger = logging.getLogger(__name__)

# Deletes KEYS[1] only while it still holds ARGV[1].
_COMPARE_AND_DELETE = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
end
return 0
"""


class SessionRegistry(abc.ABC):
    """Abstract user -> session mapping."""

    @abc.abstractmethod
    async def register(self, user_id: int, session_id: str) -> None:
        """Point ``user_id`` at ``session_id``, replacing any previous session."""

    @abc.abstractmethod
    async def unregister(self, user_id: int, session_id: str) -> bool:
        """Remove the entry if it still points at ``session_id``.

        Returns:
            True if an entry was removed.
        """

    @abc.abstractmethod
    async def lookup(self, user_id: int) -> str | None:
        """Return the user's active session id, if any."""

    async def close(self) -> None:
        """Release backend resources."""


class InMemorySessionRegistry(SessionRegistry):
    """Process-local registry.

    Mutations never await, so on a single event loop each one runs to
    completion without interleaving.
    """

    def __init__(self) -> None:
        self._sessions: dict[int, str] = {}

    async def register(self, user_id: int, session_id: str) -> None:
        self._sessions[user_id] = session_id

    async def unregister(self, user_id: int, session_id: str) -> bool:
        if self._sessions.get(user_id) != session_id:
            return False
        del self._sessions[user_id]
        return True

    async def lookup(self, user_id: int) -> str | None:
        return self._sessions.get(user_id)

    def __len__(self) -> int:
        return len(self._sessions)


class RedisSessionRegistry(SessionRegistry):
    """Registry shared between processes through Redis keys."""

    def __init__(self, client: Any, prefix: str = "cupid:session") -> None:
        self._client = client
        self._prefix = prefix
        self._compare_and_delete = client.register_script(_COMPARE_AND_DELETE)

    def _key(self, user_id: int) -> str:
        return f"{self._prefix}:{user_id}"

    async def register(self, user_id: int, session_id: str) -> None:
        await self._client.set(self._key(user_id), session_id)

    async def unregister(self, user_id: int, session_id: str) -> bool:
        removed = await self._compare_and_delete(keys=[self._key(user_id)], args=[session_id])
        return bool(removed)

    async def lookup(self, user_id: int) -> str | None:
        value = await self._client.get(self._key(user_id))
        if value is None:
            return None
        return value.decode() if isinstance(value, bytes) else str(value)

    async def close(self) -> None:
        await self._client.aclose()


def build_session_registry(config: Settings) -> SessionRegistry:
    """Return the registry backend selected by configuration."""
    if config.session_registry_backend == "redis":
        logger.info("Using Redis session registry at %s", config.redis_url)
        client = redis.from_url(config.redis_url, encoding="utf-8", decode_responses=True)
        return RedisSessionRegistry(client, prefix=config.session_registry_prefix)
    return InMemorySessionRegistry()
