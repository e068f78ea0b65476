# src/cupid_stage/api/v1/endpoints/realtime.py
"""WebSocket endpoint delivering conversation events in real time."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cupid_stage.core.security import decode_access_token
from cupid_stage.errors import CupidError, InternalError, InvalidInputError, UnauthenticatedError
from cupid_stage.models import User
from cupid_stage.realtime import RealtimeNotifier
from cupid_stage.schemas.realtime import (
    ClientFrame,
    ConversationRef,
    SendMessagePayload,
    TypingPayload,
)
from cupid_stage.services import ConversationManager, MessageStore

from ..dependencies import SessionFactory, SessionFactoryDep

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


@dataclass
class SocketContext:
    """Everything a client event handler needs about its session.

    No database session lives here: each frame opens its own through
    ``open_session`` and releases it before the next frame is read.
    """

    notifier: RealtimeNotifier
    open_session: SessionFactory
    user_id: int
    user_name: str
    session_id: str

    async def reply(self, event: str, data: dict[str, Any]) -> None:
        await self.notifier.send(self.session_id, event, data)


def _extract_token(websocket: WebSocket) -> str | None:
    token = websocket.query_params.get("token")
    if token:
        return token
    header = websocket.headers.get("authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


def _authenticate(websocket: WebSocket, db: Session) -> User:
    user_id = decode_access_token(_extract_token(websocket))
    user = db.get(User, user_id)
    if user is None:
        raise UnauthenticatedError("User not found")
    return user


async def _join_conversation(ctx: SocketContext, db: Session, data: dict[str, Any]) -> None:
    payload = ConversationRef.model_validate(data)
    conversation = ConversationManager(db).get_conversation(payload.conversation_id)
    ctx.notifier.subscribe_conversation(ctx.session_id, ctx.user_id, conversation)
    await ctx.reply("conversation_joined", {"conversationId": conversation.id})


async def _leave_conversation(ctx: SocketContext, db: Session, data: dict[str, Any]) -> None:
    payload = ConversationRef.model_validate(data)
    ctx.notifier.unsubscribe_conversation(ctx.session_id, payload.conversation_id)
    await ctx.reply("conversation_left", {"conversationId": payload.conversation_id})


async def _send_message(ctx: SocketContext, db: Session, data: dict[str, Any]) -> None:
    payload = SendMessagePayload.model_validate(data)
    sent = MessageStore(db).send_message(
        payload.conversation_id,
        ctx.user_id,
        payload.message_text,
    )
    await ctx.notifier.broadcast_new_message(sent)


async def _typing(ctx: SocketContext, db: Session, data: dict[str, Any]) -> None:
    payload = TypingPayload.model_validate(data)
    ConversationManager(db).require_participant(payload.conversation_id, ctx.user_id)
    await ctx.notifier.broadcast_typing(
        payload.conversation_id,
        ctx.user_id,
        payload.is_typing,
        user_name=ctx.user_name,
        session_id=ctx.session_id,
    )


async def _mark_read(ctx: SocketContext, db: Session, data: dict[str, Any]) -> None:
    payload = ConversationRef.model_validate(data)
    MessageStore(db).mark_read(payload.conversation_id, ctx.user_id)
    await ctx.notifier.broadcast_read(
        payload.conversation_id,
        ctx.user_id,
        session_id=ctx.session_id,
    )


Handler = Callable[[SocketContext, Session, dict[str, Any]], Awaitable[None]]

HANDLERS: dict[str, Handler] = {
    "join_conversation": _join_conversation,
    "leave_conversation": _leave_conversation,
    "send_message": _send_message,
    "typing": _typing,
    "mark_read": _mark_read,
}


async def _dispatch(ctx: SocketContext, raw: str) -> None:
    """Run one client frame; failures are reported to this session only."""
    event = "unknown"
    try:
        frame = ClientFrame.model_validate_json(raw)
        event = frame.event
        handler = HANDLERS.get(event)
        if handler is None:
            raise InvalidInputError(f"Unknown event: {event}")
        # The scope rolls back on error and always closes.
        with ctx.open_session() as db:
            await handler(ctx, db, frame.data)
    except CupidError as exc:
        logger.warning("Event %s from user %s failed: %s", event, ctx.user_id, exc.message)
        await ctx.reply("error", {"event": event, "code": exc.code, "message": exc.message})
    except ValidationError as exc:
        logger.warning("Malformed %s frame from user %s", event, ctx.user_id)
        await ctx.reply(
            "error",
            {
                "event": event,
                "code": InvalidInputError.code,
                "message": exc.errors()[0]["msg"] if exc.errors() else "Invalid payload",
            },
        )
    except SQLAlchemyError:
        logger.exception("Database error handling %s from user %s", event, ctx.user_id)
        await ctx.reply(
            "error",
            {"event": event, "code": InternalError.code, "message": "Internal server error"},
        )


@router.websocket("/ws")
async def realtime_socket(websocket: WebSocket, open_session: SessionFactoryDep) -> None:
    """Authenticate at handshake, then relay client events until disconnect."""
    try:
        with open_session() as db:
            user = _authenticate(websocket, db)
            user_id, user_name = user.id, user.name
    except UnauthenticatedError as exc:
        logger.info("Rejected websocket handshake: %s", exc.message)
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=exc.message)
        return

    await websocket.accept()
    notifier: RealtimeNotifier = websocket.app.state.notifier
    ctx = SocketContext(
        notifier=notifier,
        open_session=open_session,
        user_id=user_id,
        user_name=user_name,
        session_id=uuid.uuid4().hex,
    )
    await notifier.on_connect(user_id, ctx.session_id, websocket)
    try:
        await ctx.reply("connected", {"userId": user_id, "sessionId": ctx.session_id})
        while True:
            raw = await websocket.receive_text()
            await _dispatch(ctx, raw)
    except WebSocketDisconnect:
        pass
    finally:
        await notifier.on_disconnect(user_id, ctx.session_id)
