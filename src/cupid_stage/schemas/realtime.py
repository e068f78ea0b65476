# src/cupid_stage/schemas/realtime.py
"""Payloads carried by websocket frames."""

from datetime import datetime

from pydantic import BaseModel, Field

from .common import CamelModel


class ClientFrame(BaseModel):
    """Envelope of every frame a client sends."""

    event: str
    data: dict = Field(default_factory=dict)


class ConversationRef(CamelModel):
    """Payload of ``join_conversation``, ``leave_conversation`` and ``mark_read``."""

    conversation_id: int = Field(..., gt=0)


class SendMessagePayload(CamelModel):
    conversation_id: int = Field(..., gt=0)
    message_text: str


class TypingPayload(CamelModel):
    conversation_id: int = Field(..., gt=0)
    is_typing: bool = True


class UserTypingEvent(CamelModel):
    conversation_id: int
    user_id: int
    user_name: str | None = None
    is_typing: bool


class MessagesReadEvent(CamelModel):
    conversation_id: int
    reader_id: int


class ConversationUpdateEvent(CamelModel):
    conversation_id: int
    last_message: str
    last_message_time: datetime
    sender_id: int
    sender_name: str
