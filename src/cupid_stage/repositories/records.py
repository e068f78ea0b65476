"""Typed read models returned by repositories and services."""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

__all__ = [
    "UserSummary",
    "MatchSummary",
    "ConversationSummary",
    "MessageView",
    "SentMessage",
    "SwipeResult",
    "NearbyUser",
    "BlockSummary",
    "ReportSummary",
]


@dataclass(frozen=True)
class UserSummary:
    """Public display data for another user."""

    id: int
    name: str
    photo_url: str | None

    def with_default_photo(self, photo_url: str) -> UserSummary:
        """Return this summary, filling in ``photo_url`` when none is stored."""
        return self if self.photo_url else replace(self, photo_url=photo_url)


@dataclass(frozen=True)
class MatchSummary:
    """A match seen from one participant's side."""

    match_id: int
    other_user: UserSummary
    matched_at: datetime


@dataclass(frozen=True)
class ConversationSummary:
    """Conversation list entry with preview and unread count."""

    conversation_id: int
    other_user: UserSummary
    last_message: str | None
    last_message_time: datetime | None
    unread_count: int
    updated_at: datetime


@dataclass(frozen=True)
class MessageView:
    """A message as rendered for a particular viewer."""

    id: int
    conversation_id: int
    text: str
    sender_id: int
    sender_name: str
    created_at: datetime
    is_me: bool
    is_read: bool


@dataclass(frozen=True)
class SentMessage:
    """Result of a successful send, carrying the receiver for fan-out."""

    id: int
    conversation_id: int
    text: str
    sender_id: int
    sender_name: str
    created_at: datetime
    receiver_id: int


@dataclass(frozen=True)
class SwipeResult:
    """Outcome of recording a swipe."""

    matched: bool


@dataclass(frozen=True)
class NearbyUser:
    """Discovery candidate with its distance from the searcher."""

    user: UserSummary
    distance_km: float


@dataclass(frozen=True)
class BlockSummary:
    """A block placed by the current user."""

    block_id: int
    blocked_user: UserSummary
    reason: str | None
    blocked_at: datetime


@dataclass(frozen=True)
class ReportSummary:
    """A report filed by the current user."""

    report_id: int
    reported_user: UserSummary
    reason: str
    description: str | None
    status: str
    reported_at: datetime
