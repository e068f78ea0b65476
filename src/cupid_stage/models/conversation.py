# src/cupid_stage/models/conversation.py
"""Models for conversations between matched users and their messages."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from cupid_stage.db.session import Base
from cupid_stage.db.time import UTCDateTime, utcnow


class Conversation(Base):
    """Single message thread tied to one unordered user pair.

    ``user1_id``/``user2_id`` keep the order of the creating call while
    ``user_lo``/``user_hi`` carry the canonical pair that enforces uniqueness.
    """

    __tablename__ = "conversation"
    __table_args__ = (
        UniqueConstraint("user_lo", "user_hi", name="uq_conversation_pair"),
        CheckConstraint("user1_id <> user2_id", name="ck_conversation_no_self"),
        Index("ix_conversation_user1_id", "user1_id"),
        Index("ix_conversation_user2_id", "user2_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user1_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_account.id", ondelete="CASCADE"), nullable=False
    )
    user2_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_account.id", ondelete="CASCADE"), nullable=False
    )
    user_lo: Mapped[int] = mapped_column(Integer, nullable=False)
    user_hi: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), default=utcnow)
    # Last activity; bumped on every new message.
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime(), default=utcnow)

    @property
    def participants(self) -> tuple[int, int]:
        """Return both participant ids in creation order."""
        return (self.user1_id, self.user2_id)

    def has_participant(self, user_id: int) -> bool:
        """Return True if ``user_id`` is one of the two participants."""
        return user_id in (self.user1_id, self.user2_id)

    def other(self, user_id: int) -> int:
        """Return the participant that is not ``user_id``."""
        return self.user2_id if user_id == self.user1_id else self.user1_id


class Message(Base):
    """Append-only message; ``is_read`` is the only mutable field."""

    __tablename__ = "message"
    __table_args__ = (
        Index("ix_message_conversation_created", "conversation_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    conversation_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("conversation.id", ondelete="CASCADE"), nullable=False
    )
    sender_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_account.id", ondelete="CASCADE"), nullable=False
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), default=utcnow)
