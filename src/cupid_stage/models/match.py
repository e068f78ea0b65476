# src/cupid_stage/models/match.py
"""Models describing symmetric matches between two users."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from cupid_stage.db.session import Base
from cupid_stage.db.time import UTCDateTime, utcnow


def canonical_pair(user_a: int, user_b: int) -> tuple[int, int]:
    """Return the unordered pair as ``(lo, hi)``."""
    return (user_a, user_b) if user_a < user_b else (user_b, user_a)


class Match(Base):
    """Mutual right-swipe relationship stored as an ordered pair."""

    __tablename__ = "match"
    __table_args__ = (
        # One row per unordered pair; duplicate inserts are ignored.
        UniqueConstraint("user_lo", "user_hi", name="uq_match_pair"),
        CheckConstraint("user_lo < user_hi", name="ck_match_ordered_pair"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_lo: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_account.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_hi: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_account.id", ondelete="CASCADE"), nullable=False, index=True
    )
    matched_at: Mapped[datetime] = mapped_column(UTCDateTime(), default=utcnow)

    def other(self, user_id: int) -> int:
        """Return the participant that is not ``user_id``."""
        return self.user_hi if user_id == self.user_lo else self.user_lo
