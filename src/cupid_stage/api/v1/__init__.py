# src/cupid_stage/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    conversations_router,
    discovery_router,
    matches_router,
    messages_router,
    moderation_router,
    realtime_router,
    swipes_router,
    system_router,
)

__all__ = [
    "swipes_router",
    "matches_router",
    "conversations_router",
    "messages_router",
    "discovery_router",
    "moderation_router",
    "realtime_router",
    "system_router",
]
