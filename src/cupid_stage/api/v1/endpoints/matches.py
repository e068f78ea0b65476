# src/cupid_stage/api/v1/endpoints/matches.py
"""Match endpoints for the Cupid API."""

from __future__ import annotations

from fastapi import APIRouter

from cupid_stage.schemas import MatchResponse
from cupid_stage.services import MatchRegistry

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/matches", tags=["matches"])


@router.get("", response_model=list[MatchResponse])
async def list_matches(current_user: CurrentUserDep, db: SessionDep) -> list[MatchResponse]:
    """List the current user's matches, newest first."""
    return [
        MatchResponse.from_record(match)
        for match in MatchRegistry(db).list_matches(current_user.id)
    ]
