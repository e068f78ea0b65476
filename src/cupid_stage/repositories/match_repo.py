"""Data access helpers for working with matches."""
from __future__ import annotations

from sqlalchemy import case, delete, or_, select
from sqlalchemy.orm import Session, aliased

from cupid_stage.models.match import Match, canonical_pair
from cupid_stage.models.user import User

from .base import dialect_insert
from .records import MatchSummary, UserSummary

__all__ = ["MatchRepository"]


class MatchRepository:
    """Thin wrapper around database access for match entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def insert_match_if_absent(self, user_a: int, user_b: int) -> bool:
        """Insert the canonical pair unless it already exists.

        Returns:
            True when a new row was written, False when the pair was already matched.
        """
        user_lo, user_hi = canonical_pair(user_a, user_b)
        stmt = (
            dialect_insert(self.session, Match)
            .values(user_lo=user_lo, user_hi=user_hi)
            .on_conflict_do_nothing(index_elements=["user_lo", "user_hi"])
            .returning(Match.id)
        )
        return self.session.execute(stmt).scalar_one_or_none() is not None

    def find_match(self, user_a: int, user_b: int) -> Match | None:
        """Return the match for an unordered pair, if any."""
        user_lo, user_hi = canonical_pair(user_a, user_b)
        result = self.session.execute(
            select(Match).where(Match.user_lo == user_lo, Match.user_hi == user_hi)
        )
        return result.scalars().first()

    def list_matches_for_user(self, user_id: int) -> list[MatchSummary]:
        """Return matches involving ``user_id`` with the other user's display data."""
        other = aliased(User)
        other_id = case((Match.user_lo == user_id, Match.user_hi), else_=Match.user_lo)
        result = self.session.execute(
            select(Match.id, Match.matched_at, other.id, other.name, other.photo_url)
            .join(other, other.id == other_id)
            .where(or_(Match.user_lo == user_id, Match.user_hi == user_id))
            .order_by(Match.matched_at.desc(), Match.id.desc())
        )
        return [
            MatchSummary(
                match_id=match_id,
                other_user=UserSummary(id=other_user_id, name=name, photo_url=photo_url),
                matched_at=matched_at,
            )
            for match_id, matched_at, other_user_id, name, photo_url in result
        ]

    def delete_match(self, user_a: int, user_b: int) -> bool:
        """Delete the match for an unordered pair and report whether one existed."""
        user_lo, user_hi = canonical_pair(user_a, user_b)
        result = self.session.execute(
            delete(Match).where(Match.user_lo == user_lo, Match.user_hi == user_hi)
        )
        return bool(result.rowcount)
