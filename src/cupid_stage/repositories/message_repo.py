"""Data access helpers for messages and read state."""
from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from cupid_stage.models.conversation import Message
from cupid_stage.models.user import User

from .records import MessageView

__all__ = ["MessageRepository"]


class MessageRepository:
    """Thin wrapper around database access for message entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def insert_message(self, conversation_id: int, sender_id: int, body: str) -> Message:
        """Append an unread message and return the flushed ORM instance."""
        message = Message(
            conversation_id=conversation_id,
            sender_id=sender_id,
            body=body,
            is_read=False,
        )
        self.session.add(message)
        self.session.flush()
        return message

    def list_messages_for_conversation(
        self, conversation_id: int, viewer_id: int
    ) -> list[MessageView]:
        """Return a conversation's messages oldest first, flagged for ``viewer_id``."""
        result = self.session.execute(
            select(Message, User.name)
            .join(User, User.id == Message.sender_id)
            .where(Message.conversation_id == conversation_id)
            .order_by(Message.created_at.asc(), Message.id.asc())
        )
        return [
            MessageView(
                id=message.id,
                conversation_id=message.conversation_id,
                text=message.body,
                sender_id=message.sender_id,
                sender_name=sender_name,
                created_at=message.created_at,
                is_me=message.sender_id == viewer_id,
                is_read=message.is_read,
            )
            for message, sender_name in result
        ]

    def mark_messages_read(self, conversation_id: int, reader_id: int) -> int:
        """Flag every unread message not sent by ``reader_id`` as read.

        Returns:
            The number of messages whose flag changed.
        """
        result = self.session.execute(
            update(Message)
            .where(
                Message.conversation_id == conversation_id,
                Message.sender_id != reader_id,
                Message.is_read.is_(False),
            )
            .values(is_read=True)
        )
        return result.rowcount or 0
