# src/cupid_stage/models/user.py
"""SQLAlchemy model for user accounts referenced by the matching core."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from cupid_stage.db.session import Base
from cupid_stage.db.time import UTCDateTime, utcnow


class User(Base):
    """Account identity with the profile fields the core reads.

    Accounts are created and edited by the profile subsystem; swipes,
    matches and conversations only reference them by id.
    """

    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    photo_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)

    is_paused: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), default=utcnow)

    @property
    def has_location(self) -> bool:
        """Return True when both coordinates are set."""
        return self.latitude is not None and self.longitude is not None
