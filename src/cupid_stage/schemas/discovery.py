# src/cupid_stage/schemas/discovery.py
"""Discovery-related Pydantic schemas."""

from pydantic import Field

from cupid_stage.repositories.records import NearbyUser

from .common import CamelModel


class LocationUpdate(CamelModel):
    """Schema for updating the current user's coordinates."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class NearbyUserResponse(CamelModel):
    """Discovery candidate with distance."""

    id: int
    name: str
    photo_url: str | None = None
    distance_km: float

    @classmethod
    def from_record(cls, nearby: NearbyUser) -> "NearbyUserResponse":
        return cls(
            id=nearby.user.id,
            name=nearby.user.name,
            photo_url=nearby.user.photo_url,
            distance_km=nearby.distance_km,
        )
