"""Data access helpers for working with swipes."""
from __future__ import annotations

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.orm import Session

from cupid_stage.db.time import utcnow
from cupid_stage.models.swipe import Swipe, SwipeDirection

from .base import dialect_insert

__all__ = ["SwipeRepository"]


class SwipeRepository:
    """Thin wrapper around database access for swipe entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def upsert_swipe(self, swiper_id: int, swipee_id: int, direction: SwipeDirection) -> None:
        """Insert the directed swipe or overwrite the direction of an existing one."""
        stmt = dialect_insert(self.session, Swipe).values(
            swiper_id=swiper_id,
            swipee_id=swipee_id,
            direction=direction.value,
            swiped_at=utcnow(),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["swiper_id", "swipee_id"],
            set_={
                "direction": stmt.excluded.direction,
                "swiped_at": stmt.excluded.swiped_at,
            },
        )
        self.session.execute(stmt)

    def find_reciprocal_swipe(self, swiper_id: int, swipee_id: int) -> Swipe | None:
        """Return the swipee's right swipe back on the swiper, if any."""
        result = self.session.execute(
            select(Swipe).where(
                Swipe.swiper_id == swipee_id,
                Swipe.swipee_id == swiper_id,
                Swipe.direction == SwipeDirection.RIGHT.value,
            )
        )
        return result.scalars().first()

    def list_for_swiper(self, swiper_id: int) -> list[Swipe]:
        """Return swipes made by a user, newest first."""
        result = self.session.execute(
            select(Swipe)
            .where(Swipe.swiper_id == swiper_id)
            .order_by(Swipe.swiped_at.desc(), Swipe.id.desc())
        )
        return list(result.scalars())

    def swiped_ids(self, swiper_id: int) -> set[int]:
        """Return the ids of every user this user has swiped on."""
        result = self.session.execute(
            select(Swipe.swipee_id).where(Swipe.swiper_id == swiper_id)
        )
        return set(result.scalars())

    def delete_between(self, user_a: int, user_b: int) -> int:
        """Delete both directed swipes between two users and return the row count."""
        result = self.session.execute(
            delete(Swipe).where(
                or_(
                    and_(Swipe.swiper_id == user_a, Swipe.swipee_id == user_b),
                    and_(Swipe.swiper_id == user_b, Swipe.swipee_id == user_a),
                )
            )
        )
        return result.rowcount or 0
