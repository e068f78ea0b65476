# src/cupid_stage/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .conversations import router as conversations_router
from .discovery import router as discovery_router
from .matches import router as matches_router
from .messages import router as messages_router
from .moderation import router as moderation_router
from .realtime import router as realtime_router
from .swipes import router as swipes_router
from .system import router as system_router

__all__ = [
    "conversations_router",
    "discovery_router",
    "matches_router",
    "messages_router",
    "moderation_router",
    "realtime_router",
    "swipes_router",
    "system_router",
]
