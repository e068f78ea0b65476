# src/cupid_stage/models/swipe.py
"""Models capturing directed swipe preferences."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from cupid_stage.db.session import Base
from cupid_stage.db.time import UTCDateTime, utcnow


class SwipeDirection(str, enum.Enum):
    """Direction of a swipe: right accepts, left rejects."""

    LEFT = "left"
    RIGHT = "right"


class Swipe(Base):
    """Directed preference from one user toward another.

    At most one row exists per ordered (swiper, swipee) pair; a repeat swipe
    overwrites the direction.
    """

    __tablename__ = "swipe"
    __table_args__ = (
        UniqueConstraint("swiper_id", "swipee_id", name="uq_swipe_pair"),
        CheckConstraint("direction IN ('left', 'right')", name="ck_swipe_direction"),
        CheckConstraint("swiper_id <> swipee_id", name="ck_swipe_no_self"),
        Index("ix_swipe_swipee_id", "swipee_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    swiper_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_account.id", ondelete="CASCADE"), nullable=False
    )
    swipee_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_account.id", ondelete="CASCADE"), nullable=False
    )
    direction: Mapped[str] = mapped_column(String(5), nullable=False)
    swiped_at: Mapped[datetime] = mapped_column(UTCDateTime(), default=utcnow)
