"""Data access helpers for the user accounts the core reads."""
from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from cupid_stage.models.user import User

__all__ = ["UserRepository"]


class UserRepository:
    """Thin wrapper around database access for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        """Return a user by primary key."""
        return self.session.get(User, user_id)

    def update_location(self, user_id: int, latitude: float, longitude: float) -> bool:
        """Store new coordinates and report whether the user exists."""
        result = self.session.execute(
            update(User)
            .where(User.id == user_id)
            .values(latitude=latitude, longitude=longitude)
        )
        return bool(result.rowcount)

    def list_discoverable(self, exclude_ids: Collection[int]) -> list[User]:
        """Return active users with a known location, skipping ``exclude_ids``."""
        stmt = select(User).where(
            User.is_paused.is_(False),
            User.latitude.is_not(None),
            User.longitude.is_not(None),
        )
        if exclude_ids:
            stmt = stmt.where(User.id.not_in(list(exclude_ids)))
        return list(self.session.execute(stmt).scalars())
