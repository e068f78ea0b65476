"""Persistence gateway: repositories over a SQLAlchemy session."""

from .block_repo import BlockRepository
from .conversation_repo import ConversationRepository
from .match_repo import MatchRepository
from .message_repo import MessageRepository
from .report_repo import ReportRepository
from .swipe_repo import SwipeRepository
from .user_repo import UserRepository

__all__ = [
    "BlockRepository",
    "ConversationRepository",
    "MatchRepository",
    "MessageRepository",
    "ReportRepository",
    "SwipeRepository",
    "UserRepository",
]
