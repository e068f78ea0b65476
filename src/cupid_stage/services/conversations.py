"""Conversation manager: one match-gated conversation per user pair."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from cupid_stage.errors import InvalidInputError, NotFoundError, NotMatchedError, UnauthorizedError
from cupid_stage.models.conversation import Conversation
from cupid_stage.repositories import ConversationRepository

from .base import SessionService
from .matches import MatchRegistry

logger = logging.getLogger(__name__)


class ConversationManager(SessionService):
    """Service mapping matched pairs to conversations."""

    def __init__(self, db: Session, matches: MatchRegistry | None = None) -> None:
        super().__init__(db)
        self.repo = ConversationRepository(db)
        self.matches = matches or MatchRegistry(db)

    def get_conversation(self, conversation_id: int) -> Conversation:
        """Return a conversation or raise ``NotFoundError``."""
        conversation = self.repo.get(conversation_id)
        if conversation is None:
            raise NotFoundError("Conversation not found")
        return conversation

    def require_participant(self, conversation_id: int, user_id: int) -> Conversation:
        """Return the conversation if ``user_id`` takes part in it.

        Raises:
            NotFoundError: If the conversation does not exist.
            UnauthorizedError: If the user is not one of the two participants.
        """
        conversation = self.get_conversation(conversation_id)
        if not conversation.has_participant(user_id):
            raise UnauthorizedError("Unauthorized access to conversation")
        return conversation

    def get_or_create_conversation(self, user_a: int, user_b: int) -> int:
        """Return the pair's conversation id, creating the conversation on first use.

        Lookup ignores order; a new row keeps ``(user_a, user_b)`` as given.
        The match gate is enforced here as well as in ``start_conversation`` so
        no caller can open a conversation for an unmatched pair.

        Raises:
            InvalidInputError: If both ids are the same user.
            NotMatchedError: If the pair has no match.
        """
        if user_a == user_b:
            raise InvalidInputError("Cannot start conversation with yourself")
        if not self.matches.is_matched(user_a, user_b):
            raise NotMatchedError("Users are not matched")

        existing = self.repo.find_conversation_by_pair(user_a, user_b)
        if existing is not None:
            return existing.id

        conversation = self.repo.insert_conversation(user_a, user_b)
        conversation_id = conversation.id
        self._commit()
        logger.info("Conversation %s ready for users %s and %s", conversation_id, user_a, user_b)
        return conversation_id

    def start_conversation(self, requester_id: int, other_user_id: int) -> int:
        """Open (or reopen) the conversation between the requester and a match."""
        if requester_id == other_user_id:
            raise InvalidInputError("Cannot start conversation with yourself")
        if not self.matches.is_matched(requester_id, other_user_id):
            raise NotMatchedError("You can only message users you have matched with")
        return self.get_or_create_conversation(requester_id, other_user_id)
