# src/cupid_stage/api/v1/endpoints/moderation.py
"""Blocking and reporting endpoints for the Cupid API."""

from __future__ import annotations

from fastapi import APIRouter, Path, status

from cupid_stage.schemas import (
    BlockCreate,
    BlockCreateResponse,
    BlockResponse,
    BlockStatusResponse,
    ReportCreate,
    ReportCreateResponse,
    ReportResponse,
)
from cupid_stage.services import ModerationService

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/moderation", tags=["moderation"])


@router.post("/blocks", response_model=BlockCreateResponse, status_code=status.HTTP_201_CREATED)
async def block_user(
    payload: BlockCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> BlockCreateResponse:
    """Block a user; any match with them is removed."""
    block_id = ModerationService(db).block_user(
        current_user.id,
        payload.blocked_user_id,
        payload.reason,
    )
    return BlockCreateResponse(block_id=block_id)


@router.get("/blocks", response_model=list[BlockResponse])
async def list_blocks(current_user: CurrentUserDep, db: SessionDep) -> list[BlockResponse]:
    """List the users the current user has blocked."""
    return [
        BlockResponse.from_record(block)
        for block in ModerationService(db).list_blocked(current_user.id)
    ]


@router.delete("/blocks/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unblock_user(
    current_user: CurrentUserDep,
    db: SessionDep,
    user_id: int = Path(..., gt=0),
) -> None:
    """Lift a block placed by the current user."""
    ModerationService(db).unblock_user(current_user.id, user_id)


@router.get("/blocks/{user_id}/status", response_model=BlockStatusResponse)
async def block_status(
    current_user: CurrentUserDep,
    db: SessionDep,
    user_id: int = Path(..., gt=0),
) -> BlockStatusResponse:
    """Report whether the current user has blocked ``user_id``."""
    blocked = ModerationService(db).is_blocked(current_user.id, user_id)
    return BlockStatusResponse(user_id=user_id, is_blocked=blocked)


@router.post("/reports", response_model=ReportCreateResponse, status_code=status.HTTP_201_CREATED)
async def report_user(
    payload: ReportCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ReportCreateResponse:
    """Report a user for moderator review."""
    report_id = ModerationService(db).report_user(
        current_user.id,
        payload.reported_user_id,
        payload.reason,
        payload.description,
    )
    return ReportCreateResponse(report_id=report_id)


@router.get("/reports", response_model=list[ReportResponse])
async def list_reports(current_user: CurrentUserDep, db: SessionDep) -> list[ReportResponse]:
    """List the reports the current user has filed."""
    return [
        ReportResponse.from_record(report)
        for report in ModerationService(db).list_reports(current_user.id)
    ]
