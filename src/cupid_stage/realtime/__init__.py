"""Realtime delivery of conversation events over websockets."""

from .hub import ConnectionHub, conversation_channel, user_channel
from .notifier import RealtimeNotifier
from .registry import (
    InMemorySessionRegistry,
    RedisSessionRegistry,
    SessionRegistry,
    build_session_registry,
)

__all__ = [
    "ConnectionHub",
    "InMemorySessionRegistry",
    "RealtimeNotifier",
    "RedisSessionRegistry",
    "SessionRegistry",
    "build_session_registry",
    "conversation_channel",
    "user_channel",
]
