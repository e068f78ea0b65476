# src/cupid_stage/schemas/moderation.py
"""Blocking and reporting Pydantic schemas."""

from datetime import datetime

from pydantic import Field

from cupid_stage.repositories.records import BlockSummary, ReportSummary

from .common import CamelModel, UserSummaryResponse


class BlockCreate(CamelModel):
    """Schema for blocking a user."""

    blocked_user_id: int = Field(..., gt=0)
    reason: str | None = Field(None, max_length=500)


class BlockCreateResponse(CamelModel):
    """Identifier of a new block."""

    block_id: int


class BlockResponse(CamelModel):
    """A block placed by the current user."""

    block_id: int
    blocked_user: UserSummaryResponse
    reason: str | None = None
    blocked_at: datetime

    @classmethod
    def from_record(cls, block: BlockSummary) -> "BlockResponse":
        return cls(
            block_id=block.block_id,
            blocked_user=UserSummaryResponse.from_record(block.blocked_user),
            reason=block.reason,
            blocked_at=block.blocked_at,
        )


class BlockStatusResponse(CamelModel):
    """Whether the current user has blocked another user."""

    user_id: int
    is_blocked: bool


class ReportCreate(CamelModel):
    """Schema for reporting a user."""

    reported_user_id: int = Field(..., gt=0)
    reason: str = Field(
        ...,
        description=(
            "One of inappropriate_behavior, fake_profile, harassment, spam, "
            "inappropriate_photos, other"
        ),
    )
    description: str | None = Field(None, max_length=1000)


class ReportCreateResponse(CamelModel):
    """Identifier of a new report."""

    report_id: int


class ReportResponse(CamelModel):
    """A report filed by the current user."""

    report_id: int
    reported_user: UserSummaryResponse
    reason: str
    description: str | None = None
    status: str
    reported_at: datetime

    @classmethod
    def from_record(cls, report: ReportSummary) -> "ReportResponse":
        return cls(
            report_id=report.report_id,
            reported_user=UserSummaryResponse.from_record(report.reported_user),
            reason=report.reason,
            description=report.description,
            status=report.status,
            reported_at=report.reported_at,
        )
