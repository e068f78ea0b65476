"""Data access helpers for conversations and their list previews."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import and_, case, func, or_, select, update
from sqlalchemy.orm import Session, aliased

from cupid_stage.db.time import utcnow
from cupid_stage.models.conversation import Conversation, Message
from cupid_stage.models.match import canonical_pair
from cupid_stage.models.user import User

from .base import dialect_insert
from .records import ConversationSummary, UserSummary

__all__ = ["ConversationRepository"]


class ConversationRepository:
    """Thin wrapper around database access for conversation entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, conversation_id: int) -> Conversation | None:
        """Return a conversation by identifier."""
        return self.session.get(Conversation, conversation_id)

    def find_conversation_by_pair(self, user_a: int, user_b: int) -> Conversation | None:
        """Return the conversation between two users in either stored order."""
        result = self.session.execute(
            select(Conversation).where(
                or_(
                    and_(Conversation.user1_id == user_a, Conversation.user2_id == user_b),
                    and_(Conversation.user1_id == user_b, Conversation.user2_id == user_a),
                )
            )
        )
        return result.scalars().first()

    def insert_conversation(self, user1_id: int, user2_id: int) -> Conversation:
        """Create the conversation for a pair, or return the row a concurrent writer created.

        The canonical pair carries a unique constraint, so a losing insert is
        ignored by the database and the winner's row is read back instead.
        """
        user_lo, user_hi = canonical_pair(user1_id, user2_id)
        now = utcnow()
        stmt = (
            dialect_insert(self.session, Conversation)
            .values(
                user1_id=user1_id,
                user2_id=user2_id,
                user_lo=user_lo,
                user_hi=user_hi,
                created_at=now,
                updated_at=now,
            )
            .on_conflict_do_nothing(index_elements=["user_lo", "user_hi"])
        )
        self.session.execute(stmt)
        conversation = self.find_conversation_by_pair(user1_id, user2_id)
        if conversation is None:  # pragma: no cover - the insert or the winner guarantees a row
            raise LookupError(f"Conversation for pair ({user1_id}, {user2_id}) vanished")
        return conversation

    def touch_conversation(self, conversation_id: int, at: datetime | None = None) -> None:
        """Bump the last-activity timestamp."""
        self.session.execute(
            update(Conversation)
            .where(Conversation.id == conversation_id)
            .values(updated_at=at or utcnow())
        )

    def list_conversations_for_user(self, user_id: int) -> list[ConversationSummary]:
        """Return every conversation of ``user_id`` with preview and unread count.

        Ordered by last activity, most recent first.
        """
        other = aliased(User)
        other_id = case(
            (Conversation.user1_id == user_id, Conversation.user2_id),
            else_=Conversation.user1_id,
        )

        def _latest(column):  # type: ignore[no-untyped-def]
            return (
                select(column)
                .where(Message.conversation_id == Conversation.id)
                .order_by(Message.created_at.desc(), Message.id.desc())
                .limit(1)
                .correlate(Conversation)
                .scalar_subquery()
            )

        unread = (
            select(func.count(Message.id))
            .where(
                Message.conversation_id == Conversation.id,
                Message.sender_id != user_id,
                Message.is_read.is_(False),
            )
            .correlate(Conversation)
            .scalar_subquery()
        )

        result = self.session.execute(
            select(
                Conversation.id,
                Conversation.updated_at,
                other.id,
                other.name,
                other.photo_url,
                _latest(Message.body).label("last_message"),
                _latest(Message.created_at).label("last_message_time"),
                unread.label("unread_count"),
            )
            .join(other, other.id == other_id)
            .where(or_(Conversation.user1_id == user_id, Conversation.user2_id == user_id))
            .order_by(Conversation.updated_at.desc(), Conversation.id.desc())
        )
        return [
            ConversationSummary(
                conversation_id=row[0],
                updated_at=row[1],
                other_user=UserSummary(id=row[2], name=row[3], photo_url=row[4]),
                last_message=row.last_message,
                last_message_time=row.last_message_time,
                unread_count=int(row.unread_count or 0),
            )
            for row in result
        ]
