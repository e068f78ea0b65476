"""Shared plumbing for session-backed services."""
from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cupid_stage.errors import InternalError

logger = logging.getLogger(__name__)


class SessionService:
    """Base class for services that own a unit of work on a SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _commit(self) -> None:
        """Commit the session, translating persistence failures into ``InternalError``."""
        try:
            self.db.commit()
        except SQLAlchemyError as err:
            self.db.rollback()
            logger.exception("Persistence failure while committing %s", type(self).__name__)
            raise InternalError("Persistence failure") from err
