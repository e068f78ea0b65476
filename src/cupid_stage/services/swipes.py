"""Swipe engine: records directed swipes and detects mutual right swipes."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from cupid_stage.errors import InvalidInputError, NotFoundError
from cupid_stage.models.swipe import Swipe, SwipeDirection
from cupid_stage.repositories import BlockRepository, SwipeRepository, UserRepository
from cupid_stage.repositories.records import SwipeResult

from .base import SessionService
from .matches import MatchRegistry

logger = logging.getLogger(__name__)


def parse_direction(direction: SwipeDirection | str) -> SwipeDirection:
    """Coerce a raw direction into ``SwipeDirection``.

    Raises:
        InvalidInputError: If the value is neither ``left`` nor ``right``.
    """
    try:
        return SwipeDirection(direction)
    except ValueError as err:
        raise InvalidInputError("Swipe direction must be 'left' or 'right'") from err


class SwipeEngine(SessionService):
    """Service turning independent swipes into matches."""

    def __init__(self, db: Session, matches: MatchRegistry | None = None) -> None:
        super().__init__(db)
        self.swipes = SwipeRepository(db)
        self.users = UserRepository(db)
        self.blocks = BlockRepository(db)
        self.matches = matches or MatchRegistry(db)

    def record_swipe(
        self,
        swiper_id: int,
        swipee_id: int,
        direction: SwipeDirection | str,
    ) -> SwipeResult:
        """Record a swipe and create a match when it completes a mutual right pair.

        A repeat swipe overwrites the previous direction for the ordered pair.
        Left swipes never match, and an existing match is not undone by a
        later left swipe.

        Args:
            swiper_id: The authenticated user performing the swipe.
            swipee_id: The user being swiped on.
            direction: ``left`` or ``right``.

        Returns:
            ``SwipeResult(matched=True)`` when the pair is matched after this call.

        Raises:
            InvalidInputError: For a self-swipe or an unknown direction.
            NotFoundError: If the swipee does not exist or a block separates the pair.
        """
        parsed = parse_direction(direction)
        if swiper_id == swipee_id:
            raise InvalidInputError("Cannot swipe on yourself")
        if self.users.get(swipee_id) is None or self.blocks.is_blocked_between(
            swiper_id, swipee_id
        ):
            raise NotFoundError("User not found")

        self.swipes.upsert_swipe(swiper_id, swipee_id, parsed)
        self._commit()

        if parsed is SwipeDirection.LEFT:
            return SwipeResult(matched=False)

        if self.swipes.find_reciprocal_swipe(swiper_id, swipee_id) is None:
            return SwipeResult(matched=False)

        self.matches.create_match_if_absent(swiper_id, swipee_id)
        return SwipeResult(matched=True)

    def swipe_history(self, user_id: int) -> list[Swipe]:
        """Return the swipes made by ``user_id``, newest first."""
        return self.swipes.list_for_swiper(user_id)
