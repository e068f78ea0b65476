"""initial schema

Revision ID: 5c1d2e8a9f30
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1d2e8a9f30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create accounts, swipes, matches, conversations, messages and blocks."""
    op.create_table(
        "user_account",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("photo_url", sa.Text(), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("is_paused", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "swipe",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "swiper_id",
            sa.Integer(),
            sa.ForeignKey("user_account.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "swipee_id",
            sa.Integer(),
            sa.ForeignKey("user_account.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("direction", sa.String(length=5), nullable=False),
        sa.Column("swiped_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("swiper_id", "swipee_id", name="uq_swipe_pair"),
        sa.CheckConstraint("direction IN ('left', 'right')", name="ck_swipe_direction"),
        sa.CheckConstraint("swiper_id <> swipee_id", name="ck_swipe_no_self"),
    )
    op.create_index("ix_swipe_swipee_id", "swipe", ["swipee_id"])

    op.create_table(
        "match",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_lo",
            sa.Integer(),
            sa.ForeignKey("user_account.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "user_hi",
            sa.Integer(),
            sa.ForeignKey("user_account.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("matched_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("user_lo", "user_hi", name="uq_match_pair"),
        sa.CheckConstraint("user_lo < user_hi", name="ck_match_ordered_pair"),
    )
    op.create_index("ix_match_user_lo", "match", ["user_lo"])
    op.create_index("ix_match_user_hi", "match", ["user_hi"])

    op.create_table(
        "conversation",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "user1_id",
            sa.Integer(),
            sa.ForeignKey("user_account.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "user2_id",
            sa.Integer(),
            sa.ForeignKey("user_account.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_lo", sa.Integer(), nullable=False),
        sa.Column("user_hi", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("user_lo", "user_hi", name="uq_conversation_pair"),
        sa.CheckConstraint("user1_id <> user2_id", name="ck_conversation_no_self"),
    )
    op.create_index("ix_conversation_user1_id", "conversation", ["user1_id"])
    op.create_index("ix_conversation_user2_id", "conversation", ["user2_id"])

    op.create_table(
        "message",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "conversation_id",
            sa.Integer(),
            sa.ForeignKey("conversation.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "sender_id",
            sa.Integer(),
            sa.ForeignKey("user_account.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "ix_message_conversation_created",
        "message",
        ["conversation_id", "created_at"],
    )

    op.create_table(
        "blocked_user",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "blocker_id",
            sa.Integer(),
            sa.ForeignKey("user_account.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "blocked_id",
            sa.Integer(),
            sa.ForeignKey("user_account.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("blocker_id", "blocked_id", name="uq_blocked_user_pair"),
        sa.CheckConstraint("blocker_id <> blocked_id", name="ck_blocked_user_no_self"),
    )
    op.create_index("ix_blocked_user_blocker_id", "blocked_user", ["blocker_id"])

    op.create_table(
        "user_report",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "reporter_id",
            sa.Integer(),
            sa.ForeignKey("user_account.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "reported_id",
            sa.Integer(),
            sa.ForeignKey("user_account.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("reason", sa.String(length=32), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("reporter_id <> reported_id", name="ck_user_report_no_self"),
    )
    op.create_index("ix_user_report_reporter_id", "user_report", ["reporter_id"])
    op.create_index("ix_user_report_reported_id", "user_report", ["reported_id"])


def downgrade() -> None:
    """Drop every table created by this revision."""
    op.drop_index("ix_user_report_reported_id", table_name="user_report")
    op.drop_index("ix_user_report_reporter_id", table_name="user_report")
    op.drop_table("user_report")
    op.drop_index("ix_blocked_user_blocker_id", table_name="blocked_user")
    op.drop_table("blocked_user")
    op.drop_index("ix_message_conversation_created", table_name="message")
    op.drop_table("message")
    op.drop_index("ix_conversation_user2_id", table_name="conversation")
    op.drop_index("ix_conversation_user1_id", table_name="conversation")
    op.drop_table("conversation")
    op.drop_index("ix_match_user_hi", table_name="match")
    op.drop_index("ix_match_user_lo", table_name="match")
    op.drop_table("match")
    op.drop_index("ix_swipe_swipee_id", table_name="swipe")
    op.drop_table("swipe")
    op.drop_table("user_account")
