"""Message store and read-state tracking for conversations."""
from __future__ import annotations

import dataclasses
import logging

from sqlalchemy.orm import Session

from cupid_stage.core.settings import settings
from cupid_stage.errors import InvalidInputError, NotMatchedError
from cupid_stage.repositories import ConversationRepository, MessageRepository, UserRepository
from cupid_stage.repositories.records import ConversationSummary, MessageView, SentMessage

from .base import SessionService
from .conversations import ConversationManager
from .matches import MatchRegistry

logger = logging.getLogger(__name__)


class MessageStore(SessionService):
    """Service appending messages and tracking what each participant has read."""

    def __init__(
        self,
        db: Session,
        matches: MatchRegistry | None = None,
        conversations: ConversationManager | None = None,
    ) -> None:
        super().__init__(db)
        self.messages = MessageRepository(db)
        self.conversation_repo = ConversationRepository(db)
        self.users = UserRepository(db)
        self.matches = matches or MatchRegistry(db)
        self.conversations = conversations or ConversationManager(db, self.matches)

    def list_conversations(self, user_id: int) -> list[ConversationSummary]:
        """Return the user's conversations with previews, most recently active first."""
        summaries = self.conversation_repo.list_conversations_for_user(user_id)
        return [
            dataclasses.replace(
                summary,
                other_user=summary.other_user.with_default_photo(settings.default_avatar_url),
            )
            for summary in summaries
        ]

    def list_messages(self, conversation_id: int, user_id: int) -> list[MessageView]:
        """Return every message oldest first; does not change read state.

        Raises:
            NotFoundError: If the conversation does not exist.
            UnauthorizedError: If ``user_id`` is not a participant.
        """
        self.conversations.require_participant(conversation_id, user_id)
        return self.messages.list_messages_for_conversation(conversation_id, user_id)

    def send_message(self, conversation_id: int, sender_id: int, text: str) -> SentMessage:
        """Append a message after re-checking that the participants are still matched.

        Raises:
            InvalidInputError: If the trimmed text is empty or too long.
            NotFoundError: If the conversation does not exist.
            UnauthorizedError: If the sender is not a participant.
            NotMatchedError: If the participants are no longer matched.
        """
        body = (text or "").strip()
        if not body:
            raise InvalidInputError("Message text is required")
        if len(body) > settings.message_max_length:
            raise InvalidInputError(
                f"Message must not exceed {settings.message_max_length} characters"
            )

        conversation = self.conversations.require_participant(conversation_id, sender_id)
        if not self.matches.is_matched(conversation.user1_id, conversation.user2_id):
            raise NotMatchedError("Users are not matched")
        receiver_id = conversation.other(sender_id)

        message = self.messages.insert_message(conversation_id, sender_id, body)
        self.conversation_repo.touch_conversation(conversation_id, message.created_at)
        sent = SentMessage(
            id=message.id,
            conversation_id=conversation_id,
            text=message.body,
            sender_id=sender_id,
            sender_name=self._display_name(sender_id),
            created_at=message.created_at,
            receiver_id=receiver_id,
        )
        self._commit()
        logger.debug("Message %s stored in conversation %s", sent.id, conversation_id)
        return sent

    def mark_read(self, conversation_id: int, reader_id: int) -> int:
        """Mark the other participant's messages as read; safe to repeat.

        Returns:
            How many messages changed state.
        """
        self.conversations.require_participant(conversation_id, reader_id)
        updated = self.messages.mark_messages_read(conversation_id, reader_id)
        self._commit()
        return updated

    def _display_name(self, user_id: int) -> str:
        user = self.users.get(user_id)
        return user.name if user is not None else ""
