# src/cupid_stage/models/moderation.py
"""Models for user blocking and reporting."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from cupid_stage.db.session import Base
from cupid_stage.db.time import UTCDateTime, utcnow


class BlockedUser(Base):
    """Directed block placed by one user on another."""

    __tablename__ = "blocked_user"
    __table_args__ = (
        UniqueConstraint("blocker_id", "blocked_id", name="uq_blocked_user_pair"),
        CheckConstraint("blocker_id <> blocked_id", name="ck_blocked_user_no_self"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    blocker_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_account.id", ondelete="CASCADE"), nullable=False, index=True
    )
    blocked_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_account.id", ondelete="CASCADE"), nullable=False
    )
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), default=utcnow)


class ReportReason(str, enum.Enum):
    """Why a user was reported."""

    INAPPROPRIATE_BEHAVIOR = "inappropriate_behavior"
    FAKE_PROFILE = "fake_profile"
    HARASSMENT = "harassment"
    SPAM = "spam"
    INAPPROPRIATE_PHOTOS = "inappropriate_photos"
    OTHER = "other"


class ReportStatus(str, enum.Enum):
    """Review state of a report; pending and reviewed reports are open."""

    PENDING = "pending"
    REVIEWED = "reviewed"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


OPEN_REPORT_STATUSES = (ReportStatus.PENDING.value, ReportStatus.REVIEWED.value)


class UserReport(Base):
    """A report filed by one user against another, awaiting moderator review."""

    __tablename__ = "user_report"
    __table_args__ = (
        CheckConstraint("reporter_id <> reported_id", name="ck_user_report_no_self"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reporter_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_account.id", ondelete="CASCADE"), nullable=False, index=True
    )
    reported_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_account.id", ondelete="CASCADE"), nullable=False, index=True
    )
    reason: Mapped[str] = mapped_column(String(32), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=ReportStatus.PENDING.value
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), default=utcnow)
