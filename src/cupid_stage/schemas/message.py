# src/cupid_stage/schemas/message.py
"""Message-related Pydantic schemas."""

from datetime import datetime

from pydantic import Field

from .common import CamelModel


class MessageCreate(CamelModel):
    """Schema for sending a message."""

    conversation_id: int = Field(..., gt=0)
    message_text: str = Field(..., description="Message body; trimmed before storage")


class MessageResponse(CamelModel):
    """A message as rendered for the viewer."""

    id: int
    conversation_id: int
    text: str
    sender_id: int
    sender_name: str
    created_at: datetime
    is_me: bool
    is_read: bool


class SentMessageResponse(CamelModel):
    """A freshly stored message, also used as the ``new_message`` event payload."""

    id: int
    conversation_id: int
    text: str
    sender_id: int
    sender_name: str
    created_at: datetime
    receiver_id: int
