# src/cupid_stage/api/v1/endpoints/system.py
"""System endpoints exposing service metadata."""

from __future__ import annotations

from fastapi import APIRouter

from cupid_stage.core.settings import settings

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/config")
async def get_config() -> dict[str, object]:
    """Return client-relevant limits."""
    return {
        "messageMaxLength": settings.message_max_length,
        "nearbyDefaultRadiusKm": settings.nearby_default_radius_km,
        "defaultAvatarUrl": settings.default_avatar_url,
    }
