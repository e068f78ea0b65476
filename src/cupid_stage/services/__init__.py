# src/cupid_stage/services/__init__.py
"""Business logic services for the Cupid application."""

from .conversations import ConversationManager
from .discovery import DiscoveryService
from .matches import MatchRegistry
from .messages import MessageStore
from .moderation import ModerationService
from .swipes import SwipeEngine

__all__ = [
    "ConversationManager",
    "DiscoveryService",
    "MatchRegistry",
    "MessageStore",
    "ModerationService",
    "SwipeEngine",
]
