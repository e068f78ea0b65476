"""Data access helpers for user blocks."""
from __future__ import annotations

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.orm import Session

from cupid_stage.models.moderation import BlockedUser
from cupid_stage.models.user import User

from .base import dialect_insert
from .records import BlockSummary, UserSummary

__all__ = ["BlockRepository"]


class BlockRepository:
    """Thin wrapper around database access for block entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def insert_block(self, blocker_id: int, blocked_id: int, reason: str | None) -> int | None:
        """Insert a block and return its id, or None if it already existed."""
        stmt = (
            dialect_insert(self.session, BlockedUser)
            .values(blocker_id=blocker_id, blocked_id=blocked_id, reason=reason)
            .on_conflict_do_nothing(index_elements=["blocker_id", "blocked_id"])
            .returning(BlockedUser.id)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def delete_block(self, blocker_id: int, blocked_id: int) -> bool:
        """Remove a block and report whether one existed."""
        result = self.session.execute(
            delete(BlockedUser).where(
                BlockedUser.blocker_id == blocker_id,
                BlockedUser.blocked_id == blocked_id,
            )
        )
        return bool(result.rowcount)

    def list_blocks(self, blocker_id: int) -> list[BlockSummary]:
        """Return the users blocked by ``blocker_id``, most recent first."""
        result = self.session.execute(
            select(BlockedUser, User.name, User.photo_url)
            .join(User, User.id == BlockedUser.blocked_id)
            .where(BlockedUser.blocker_id == blocker_id)
            .order_by(BlockedUser.created_at.desc(), BlockedUser.id.desc())
        )
        return [
            BlockSummary(
                block_id=block.id,
                blocked_user=UserSummary(id=block.blocked_id, name=name, photo_url=photo_url),
                reason=block.reason,
                blocked_at=block.created_at,
            )
            for block, name, photo_url in result
        ]

    def blocked_ids_for(self, user_id: int) -> set[int]:
        """Return users on either side of a block involving ``user_id``."""
        result = self.session.execute(
            select(BlockedUser.blocker_id, BlockedUser.blocked_id).where(
                or_(BlockedUser.blocker_id == user_id, BlockedUser.blocked_id == user_id)
            )
        )
        return {
            blocked_id if blocker_id == user_id else blocker_id
            for blocker_id, blocked_id in result
        }

    def is_blocked_between(self, user_a: int, user_b: int) -> bool:
        """Return True when either user has blocked the other."""
        result = self.session.execute(
            select(BlockedUser.id).where(
                or_(
                    and_(BlockedUser.blocker_id == user_a, BlockedUser.blocked_id == user_b),
                    and_(BlockedUser.blocker_id == user_b, BlockedUser.blocked_id == user_a),
                )
            )
        )
        return result.first() is not None

    def has_block(self, blocker_id: int, blocked_id: int) -> bool:
        """Return True when ``blocker_id`` has blocked ``blocked_id``."""
        result = self.session.execute(
            select(BlockedUser.id).where(
                BlockedUser.blocker_id == blocker_id,
                BlockedUser.blocked_id == blocked_id,
            )
        )
        return result.first() is not None
