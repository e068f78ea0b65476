# src/cupid_stage/api/v1/endpoints/messages.py
"""Message endpoints for the Cupid API."""

from __future__ import annotations

from fastapi import APIRouter, status

from cupid_stage.schemas import MessageCreate, SentMessageResponse
from cupid_stage.services import MessageStore

from ..dependencies import CurrentUserDep, NotifierDep, SessionDep

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("", response_model=SentMessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    message_data: MessageCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    notifier: NotifierDep,
) -> SentMessageResponse:
    """Store a message and push it to connected participants."""
    sent = MessageStore(db).send_message(
        message_data.conversation_id,
        current_user.id,
        message_data.message_text,
    )
    await notifier.broadcast_new_message(sent)
    return SentMessageResponse.model_validate(sent)
