# src/cupid_stage/schemas/conversation.py
"""Conversation-related Pydantic schemas."""

from datetime import datetime

from pydantic import Field

from cupid_stage.repositories.records import ConversationSummary

from .common import CamelModel


class ConversationStart(CamelModel):
    """Schema for opening a conversation with a match."""

    other_user_id: int = Field(..., gt=0, description="Matched user to talk to")


class ConversationStartResponse(CamelModel):
    """Identifier of the pair's conversation."""

    conversation_id: int


class ConversationParticipant(CamelModel):
    """The other side of a conversation."""

    id: int
    name: str
    avatar: str | None = None


class ConversationResponse(CamelModel):
    """Conversation list entry."""

    conversation_id: int
    other_user: ConversationParticipant
    last_message: str | None = None
    last_message_time: datetime | None = None
    unread_count: int = 0
    updated_at: datetime

    @classmethod
    def from_record(cls, summary: ConversationSummary) -> "ConversationResponse":
        return cls(
            conversation_id=summary.conversation_id,
            other_user=ConversationParticipant(
                id=summary.other_user.id,
                name=summary.other_user.name,
                avatar=summary.other_user.photo_url,
            ),
            last_message=summary.last_message,
            last_message_time=summary.last_message_time,
            unread_count=summary.unread_count,
            updated_at=summary.updated_at,
        )


class MarkReadResponse(CamelModel):
    """Result of marking a conversation read."""

    conversation_id: int
    updated: int
