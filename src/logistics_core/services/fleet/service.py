"""Vehicle registration and lookup."""

from __future__ import annotations

import logging

from ...errors import InvalidArgumentError, NotFoundError
from ...models.domain import Vehicle
from ...persistence.base import UserRepository, VehicleRepository
from ..validation import validate_capacity, validate_fuel_efficiency

logger = logging.getLogger(__name__)


class FleetService:
    def __init__(self, vehicles: VehicleRepository, users: UserRepository) -> None:
        self.vehicles = vehicles
        self.users = users

    def add_vehicle(self, owner_id: str, vehicle_number: str, capacity_kg: float, fuel_efficiency: float) -> Vehicle:
        """Validate and store a vehicle for ``owner_id``.

        Vehicle number uniqueness is left to the repository, which raises its own
        error on conflict.
        """
        if self.users.find_by_id(owner_id) is None:
            raise NotFoundError("user", owner_id)
        number = vehicle_number.strip()
        if not number:
            raise InvalidArgumentError("Vehicle number must not be empty.")
        validate_capacity(capacity_kg)
        validate_fuel_efficiency(fuel_efficiency)

        vehicle = self.vehicles.save(
            Vehicle(
                owner_id=owner_id,
                vehicle_number=number,
                capacity_kg=capacity_kg,
                fuel_efficiency=fuel_efficiency,
            )
        )
        logger.info("Registered vehicle %s (%s) for user %s", vehicle.id, number, owner_id)
        return vehicle

    def get_vehicle(self, vehicle_id: str) -> Vehicle:
        vehicle = self.vehicles.find_by_id(vehicle_id)
        if vehicle is None:
            raise NotFoundError("vehicle", vehicle_id)
        return vehicle

    def vehicles_for_user(self, user_id: str) -> list[Vehicle]:
        return list(self.vehicles.find_by_user_id(user_id))
