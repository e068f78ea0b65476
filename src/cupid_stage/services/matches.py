"""Match registry: canonical, idempotent storage of symmetric matches."""
from __future__ import annotations

import logging
from dataclasses import replace

from sqlalchemy.orm import Session

from cupid_stage.core.settings import settings
from cupid_stage.errors import InvalidInputError
from cupid_stage.models.match import canonical_pair
from cupid_stage.repositories import MatchRepository
from cupid_stage.repositories.records import MatchSummary

from .base import SessionService

logger = logging.getLogger(__name__)


class MatchRegistry(SessionService):
    """Service answering and recording whether two users are matched."""

    def __init__(self, db: Session) -> None:
        super().__init__(db)
        self.repo = MatchRepository(db)

    def create_match_if_absent(self, user_a: int, user_b: int) -> bool:
        """Record a match for the unordered pair.

        A duplicate attempt, including one lost to a concurrent writer, is a
        successful no-op.

        Returns:
            True if this call created the match.
        """
        if user_a == user_b:
            raise InvalidInputError("A user cannot match with themselves")
        created = self.repo.insert_match_if_absent(user_a, user_b)
        self._commit()
        if created:
            logger.info("Match created for pair %s", canonical_pair(user_a, user_b))
        return created

    def is_matched(self, user_a: int, user_b: int) -> bool:
        """Return True if a match exists for the unordered pair."""
        return self.repo.find_match(user_a, user_b) is not None

    def list_matches(self, user_id: int) -> list[MatchSummary]:
        """Return the user's matches, newest first, with the default avatar for missing photos."""
        return [
            replace(
                match,
                other_user=match.other_user.with_default_photo(settings.default_avatar_url),
            )
            for match in self.repo.list_matches_for_user(user_id)
        ]

