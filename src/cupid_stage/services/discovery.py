"""Proximity discovery of swipe candidates."""
from __future__ import annotations

import math

from sqlalchemy.orm import Session

from cupid_stage.core.settings import settings
from cupid_stage.errors import InvalidInputError, NotFoundError
from cupid_stage.repositories import BlockRepository, SwipeRepository, UserRepository
from cupid_stage.repositories.records import NearbyUser, UserSummary

from .base import SessionService

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the great-circle distance between two points in kilometres."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def _validate_coordinates(latitude: float, longitude: float) -> None:
    if not -90.0 <= latitude <= 90.0:
        raise InvalidInputError("Latitude must be between -90 and 90")
    if not -180.0 <= longitude <= 180.0:
        raise InvalidInputError("Longitude must be between -180 and 180")


class DiscoveryService(SessionService):
    """Location updates and simple radius filtering of candidates."""

    def __init__(self, db: Session) -> None:
        super().__init__(db)
        self.users = UserRepository(db)
        self.swipes = SwipeRepository(db)
        self.blocks = BlockRepository(db)

    def update_location(self, user_id: int, latitude: float, longitude: float) -> None:
        """Store the user's current coordinates."""
        _validate_coordinates(latitude, longitude)
        if not self.users.update_location(user_id, latitude, longitude):
            raise NotFoundError("User not found")
        self._commit()

    def find_nearby(
        self,
        user_id: int,
        latitude: float,
        longitude: float,
        max_distance_km: float | None = None,
    ) -> list[NearbyUser]:
        """Return candidates within the radius, nearest first.

        Skips the user, paused accounts, users already swiped on and anyone
        on either side of a block with the user.
        """
        _validate_coordinates(latitude, longitude)
        radius = settings.nearby_default_radius_km if max_distance_km is None else max_distance_km
        if radius <= 0:
            raise InvalidInputError("Maximum distance must be positive")

        excluded = {user_id} | self.swipes.swiped_ids(user_id) | self.blocks.blocked_ids_for(user_id)
        nearby: list[NearbyUser] = []
        for candidate in self.users.list_discoverable(excluded):
            distance = haversine_km(latitude, longitude, candidate.latitude, candidate.longitude)  # type: ignore[arg-type]
            if distance <= radius:
                nearby.append(
                    NearbyUser(
                        user=UserSummary(
                            id=candidate.id,
                            name=candidate.name,
                            photo_url=candidate.photo_url,
                        ),
                        distance_km=round(distance, 2),
                    )
                )
        nearby.sort(key=lambda item: (item.distance_km, item.user.id))
        return nearby
