"""Blocking and reporting between users, and the effect of a block on matches."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from cupid_stage.errors import InvalidInputError, NotFoundError
from cupid_stage.models.moderation import ReportReason
from cupid_stage.repositories import (
    BlockRepository,
    MatchRepository,
    ReportRepository,
    SwipeRepository,
    UserRepository,
)
from cupid_stage.repositories.records import BlockSummary, ReportSummary

from .base import SessionService

logger = logging.getLogger(__name__)


def parse_reason(reason: ReportReason | str) -> ReportReason:
    """Coerce a raw report reason into ``ReportReason``.

    Raises:
        InvalidInputError: If the value is not a known reason.
    """
    try:
        return ReportReason(reason)
    except ValueError as err:
        raise InvalidInputError("Invalid reason provided") from err


class ModerationService(SessionService):
    """Service handling user blocks and reports.

    Blocking unmatches the pair: the match and both directed swipes are
    deleted, so the pair must swipe right again after an unblock to rematch.
    The conversation and its messages stay as read-only history; sends fail
    with ``NotMatchedError`` because the match gate is re-checked on every
    message.
    """

    def __init__(self, db: Session) -> None:
        super().__init__(db)
        self.blocks = BlockRepository(db)
        self.matches = MatchRepository(db)
        self.reports = ReportRepository(db)
        self.swipes = SwipeRepository(db)
        self.users = UserRepository(db)

    def block_user(self, blocker_id: int, blocked_id: int, reason: str | None = None) -> int:
        """Block a user and return the block id."""
        if blocker_id == blocked_id:
            raise InvalidInputError("You cannot block yourself")
        if self.users.get(blocked_id) is None:
            raise NotFoundError("User not found")

        block_id = self.blocks.insert_block(blocker_id, blocked_id, reason)
        if block_id is None:
            raise InvalidInputError("User is already blocked")

        self.matches.delete_match(blocker_id, blocked_id)
        self.swipes.delete_between(blocker_id, blocked_id)
        self._commit()
        logger.info("User %s blocked user %s", blocker_id, blocked_id)
        return block_id

    def unblock_user(self, blocker_id: int, blocked_id: int) -> None:
        """Lift a block placed by ``blocker_id``."""
        if not self.blocks.delete_block(blocker_id, blocked_id):
            raise NotFoundError("Block record not found")
        self._commit()
        logger.info("User %s unblocked user %s", blocker_id, blocked_id)

    def list_blocked(self, blocker_id: int) -> list[BlockSummary]:
        """Return the users ``blocker_id`` has blocked."""
        return self.blocks.list_blocks(blocker_id)

    def is_blocked(self, blocker_id: int, user_id: int) -> bool:
        """Return True if ``blocker_id`` has blocked ``user_id``."""
        return self.blocks.has_block(blocker_id, user_id)

    def report_user(
        self,
        reporter_id: int,
        reported_id: int,
        reason: ReportReason | str,
        description: str | None = None,
    ) -> int:
        """File a report for moderator review and return its id.

        Raises:
            InvalidInputError: On a self-report, an unknown reason, or while an
                earlier report on the same user is still pending or reviewed.
            NotFoundError: If the reported user does not exist.
        """
        if reporter_id == reported_id:
            raise InvalidInputError("You cannot report yourself")
        parsed = parse_reason(reason)
        if self.users.get(reported_id) is None:
            raise NotFoundError("User not found")
        if self.reports.has_open_report(reporter_id, reported_id):
            raise InvalidInputError("You have already reported this user")

        report = self.reports.insert_report(reporter_id, reported_id, parsed.value, description)
        report_id = report.id
        self._commit()
        logger.info("User %s reported user %s for %s", reporter_id, reported_id, parsed.value)
        return report_id

    def list_reports(self, reporter_id: int) -> list[ReportSummary]:
        """Return the reports ``reporter_id`` has filed."""
        return self.reports.list_reports(reporter_id)
