# src/cupid_stage/api/v1/endpoints/swipes.py
"""Swipe endpoints for the Cupid API."""

from __future__ import annotations

from fastapi import APIRouter

from cupid_stage.schemas import SwipeCreate, SwipeHistoryItem, SwipeResponse
from cupid_stage.services import SwipeEngine

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/swipes", tags=["swipes"])


@router.post("", response_model=SwipeResponse)
async def swipe(
    swipe_data: SwipeCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> SwipeResponse:
    """Record a left or right swipe; reports whether it completed a match."""
    result = SwipeEngine(db).record_swipe(
        current_user.id,
        swipe_data.swipee_id,
        swipe_data.direction,
    )
    return SwipeResponse(matched=result.matched)


@router.get("", response_model=list[SwipeHistoryItem])
async def swipe_history(current_user: CurrentUserDep, db: SessionDep) -> list[SwipeHistoryItem]:
    """List the current user's swipes, newest first."""
    return [
        SwipeHistoryItem.model_validate(item)
        for item in SwipeEngine(db).swipe_history(current_user.id)
    ]
