# src/cupid_stage/models/__init__.py
"""SQLAlchemy models for the Cupid application."""

from .conversation import Conversation, Message
from .match import Match, canonical_pair
from .moderation import BlockedUser, ReportReason, ReportStatus, UserReport
from .swipe import Swipe, SwipeDirection
from .user import User

__all__ = [
    "BlockedUser", "ReportReason", "ReportStatus", "UserReport",
    "Conversation", "Message",
    "Match", "canonical_pair",
    "Swipe", "SwipeDirection",
    "User",
]
