"""Realtime notifier: pushes conversation events to connected participants.

Delivery is best effort. Nothing here raises into the caller once a message
has been persisted; failed sends are logged and the session is dropped.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from cupid_stage.errors import UnauthorizedError
from cupid_stage.models.conversation import Conversation
from cupid_stage.repositories.records import SentMessage
from cupid_stage.schemas.message import SentMessageResponse
from cupid_stage.schemas.realtime import (
    ConversationUpdateEvent,
    MessagesReadEvent,
    UserTypingEvent,
)

from .hub import Connection, ConnectionHub, conversation_channel, user_channel
from .registry import InMemorySessionRegistry, SessionRegistry

logger = logging.getLogger(__name__)


def _payload(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


class RealtimeNotifier:
    """Coordinates the session registry with process-local channels."""

    def __init__(
        self,
        registry: SessionRegistry | None = None,
        hub: ConnectionHub | None = None,
    ) -> None:
        self.registry = registry or InMemorySessionRegistry()
        self.hub = hub or ConnectionHub()

    async def on_connect(self, user_id: int, session_id: str, connection: Connection) -> None:
        """Register an authenticated session and join its personal channel.

        A session the user already had keeps its connection but no longer
        receives personal-channel events.
        """
        previous = await self.registry.lookup(user_id)
        if previous is not None and previous != session_id:
            self.hub.leave(previous, user_channel(user_id))
        self.hub.attach(session_id, connection)
        await self.registry.register(user_id, session_id)
        self.hub.join(session_id, user_channel(user_id))
        logger.info("User %s connected with session %s", user_id, session_id)

    async def on_disconnect(self, user_id: int, session_id: str) -> None:
        """Forget a session; the registry entry survives if a newer session replaced it."""
        self.hub.detach(session_id)
        removed = await self.registry.unregister(user_id, session_id)
        logger.info(
            "User %s disconnected session %s (registry entry %s)",
            user_id,
            session_id,
            "removed" if removed else "kept",
        )

    def subscribe_conversation(
        self,
        session_id: str,
        user_id: int,
        conversation: Conversation,
    ) -> None:
        """Join the conversation channel.

        Raises:
            UnauthorizedError: If the user is not a participant.
        """
        if not conversation.has_participant(user_id):
            raise UnauthorizedError("Unauthorized access to conversation")
        self.hub.join(session_id, conversation_channel(conversation.id))
        logger.info("Session %s joined conversation %s", session_id, conversation.id)

    def unsubscribe_conversation(self, session_id: str, conversation_id: int) -> None:
        self.hub.leave(session_id, conversation_channel(conversation_id))

    async def send(self, session_id: str, event: str, data: dict[str, Any]) -> bool:
        """Deliver an event to one session only."""
        return await self.hub.send(session_id, event, data)

    async def broadcast_new_message(self, message: SentMessage) -> None:
        """Fan a stored message out to the conversation and the receiver's channel."""
        await self.hub.publish(
            conversation_channel(message.conversation_id),
            "new_message",
            _payload(SentMessageResponse.model_validate(message)),
        )
        if await self.registry.lookup(message.receiver_id) is None:
            return
        update = ConversationUpdateEvent(
            conversation_id=message.conversation_id,
            last_message=message.text,
            last_message_time=message.created_at,
            sender_id=message.sender_id,
            sender_name=message.sender_name,
        )
        await self.hub.publish(
            user_channel(message.receiver_id),
            "conversation_update",
            _payload(update),
        )

    async def broadcast_typing(
        self,
        conversation_id: int,
        user_id: int,
        is_typing: bool,
        user_name: str | None = None,
        session_id: str | None = None,
    ) -> None:
        """Tell the other subscribers that ``user_id`` started or stopped typing."""
        event = UserTypingEvent(
            conversation_id=conversation_id,
            user_id=user_id,
            user_name=user_name,
            is_typing=is_typing,
        )
        exclude = session_id or await self.registry.lookup(user_id)
        await self.hub.publish(
            conversation_channel(conversation_id),
            "user_typing",
            _payload(event),
            exclude=exclude,
        )

    async def broadcast_read(
        self,
        conversation_id: int,
        reader_id: int,
        session_id: str | None = None,
    ) -> None:
        """Tell the other subscribers that ``reader_id`` has read the conversation."""
        event = MessagesReadEvent(conversation_id=conversation_id, reader_id=reader_id)
        exclude = session_id or await self.registry.lookup(reader_id)
        await self.hub.publish(
            conversation_channel(conversation_id),
            "messages_read",
            _payload(event),
            exclude=exclude,
        )

    async def close(self) -> None:
        await self.registry.close()
