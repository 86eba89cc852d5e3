"""Location creation and lookup."""

from __future__ import annotations

import logging
from typing import Optional

from ...errors import NotFoundError
from ...models.domain import Location
from ...persistence.base import LocationRepository
from ..validation import validate_coordinates

logger = logging.getLogger(__name__)


class LocationService:
    def __init__(self, locations: LocationRepository) -> None:
        self.locations = locations

    def create_location(self, latitude: float, longitude: float, name: Optional[str] = None) -> Location:
        validate_coordinates(latitude, longitude)
        label = name.strip() if name else None
        location = self.locations.save(Location(latitude=latitude, longitude=longitude, name=label or None))
        logger.info("Created location %s at (%s, %s)", location.id, latitude, longitude)
        return location

    def get_location(self, location_id: str) -> Location:
        location = self.locations.find_by_id(location_id)
        if location is None:
            raise NotFoundError("location", location_id)
        return location

    def list_locations(self) -> list[Location]:
        return list(self.locations.find_all())
