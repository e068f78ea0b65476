# src/cupid_stage/api/v1/endpoints/conversations.py
"""Conversation endpoints for the Cupid API."""

from __future__ import annotations

from fastapi import APIRouter, Path

from cupid_stage.schemas import (
    ConversationResponse,
    ConversationStart,
    ConversationStartResponse,
    MarkReadResponse,
    MessageResponse,
)
from cupid_stage.services import ConversationManager, MessageStore

from ..dependencies import CurrentUserDep, NotifierDep, SessionDep

router = APIRouter(prefix="/conversations", tags=["conversations"])


@router.post("", response_model=ConversationStartResponse)
async def start_conversation(
    payload: ConversationStart,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ConversationStartResponse:
    """Open the conversation with a match, or return the existing one."""
    conversation_id = ConversationManager(db).start_conversation(
        current_user.id,
        payload.other_user_id,
    )
    return ConversationStartResponse(conversation_id=conversation_id)


@router.get("", response_model=list[ConversationResponse])
async def list_conversations(
    current_user: CurrentUserDep,
    db: SessionDep,
) -> list[ConversationResponse]:
    """List the current user's conversations, most recently active first."""
    return [
        ConversationResponse.from_record(summary)
        for summary in MessageStore(db).list_conversations(current_user.id)
    ]


@router.get("/{conversation_id}/messages", response_model=list[MessageResponse])
async def get_messages(
    current_user: CurrentUserDep,
    db: SessionDep,
    conversation_id: int = Path(..., gt=0),
) -> list[MessageResponse]:
    """Return the conversation history, then mark the other side's messages read.

    The returned ``isRead`` flags reflect the state before this call.
    """
    store = MessageStore(db)
    messages = store.list_messages(conversation_id, current_user.id)
    store.mark_read(conversation_id, current_user.id)
    return [MessageResponse.model_validate(message) for message in messages]


@router.post("/{conversation_id}/read", response_model=MarkReadResponse)
async def mark_read(
    current_user: CurrentUserDep,
    db: SessionDep,
    notifier: NotifierDep,
    conversation_id: int = Path(..., gt=0),
) -> MarkReadResponse:
    """Mark the conversation read and tell the other participant."""
    updated = MessageStore(db).mark_read(conversation_id, current_user.id)
    await notifier.broadcast_read(conversation_id, current_user.id)
    return MarkReadResponse(conversation_id=conversation_id, updated=updated)
