# src/cupid_stage/api/v1/endpoints/discovery.py
"""Discovery endpoints for the Cupid API."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from cupid_stage.schemas import LocationUpdate, NearbyUserResponse
from cupid_stage.services import DiscoveryService

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/discovery", tags=["discovery"])


@router.put("/location", status_code=status.HTTP_204_NO_CONTENT)
async def update_location(
    location: LocationUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> None:
    """Store the current user's coordinates."""
    DiscoveryService(db).update_location(current_user.id, location.latitude, location.longitude)


@router.get("/nearby", response_model=list[NearbyUserResponse])
async def nearby_users(
    current_user: CurrentUserDep,
    db: SessionDep,
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    max_distance_km: float | None = Query(None, gt=0, alias="maxDistanceKm"),
) -> list[NearbyUserResponse]:
    """List unswiped users within the radius, nearest first."""
    nearby = DiscoveryService(db).find_nearby(
        current_user.id,
        latitude,
        longitude,
        max_distance_km,
    )
    return [NearbyUserResponse.from_record(item) for item in nearby]
