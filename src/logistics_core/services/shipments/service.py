"""Shipment creation workflow."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from ...errors import NotFoundError
from ...models.domain import Location, Shipment
from ...persistence.base import LocationRepository, ShipmentRepository, VehicleRepository
from ..clock import Clock, utc_now
from ..validation import validate_scheduled_date, validate_weight

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ShipmentDraft:
    """Unresolved shipment input: locations are referenced by id."""

    pickup_location_id: str
    drop_location_id: str
    weight_kg: float
    scheduled_date: date


class ShipmentService:
    """Resolves references, enforces shipment invariants and persists the result."""

    def __init__(
        self,
        shipments: ShipmentRepository,
        vehicles: VehicleRepository,
        locations: LocationRepository,
        clock: Clock = utc_now,
    ) -> None:
        self.shipments = shipments
        self.vehicles = vehicles
        self.locations = locations
        self.clock = clock

    def _resolve_location(self, location_id: str) -> Location:
        location = self.locations.find_by_id(location_id)
        if location is None:
            raise NotFoundError("location", location_id)
        return location

    def create_shipment(self, vehicle_id: str, draft: ShipmentDraft) -> Shipment:
        """Create a shipment for ``vehicle_id``.

        Nothing is written unless every check passes. Errors raised by the
        shipment repository on save are not translated.
        """
        vehicle = self.vehicles.find_by_id(vehicle_id)
        if vehicle is None:
            raise NotFoundError("vehicle", vehicle_id)
        pickup = self._resolve_location(draft.pickup_location_id)
        drop = self._resolve_location(draft.drop_location_id)

        validate_weight(draft.weight_kg, vehicle.capacity_kg)
        validate_scheduled_date(draft.scheduled_date, self.clock().date())

        shipment = self.shipments.save(
            Shipment(
                vehicle=vehicle,
                pickup_location=pickup,
                drop_location=drop,
                weight_kg=draft.weight_kg,
                scheduled_date=draft.scheduled_date,
            )
        )
        logger.info(
            "Created shipment %s on vehicle %s (%s kg, %s)",
            shipment.id,
            vehicle_id,
            draft.weight_kg,
            draft.scheduled_date.isoformat(),
        )
        return shipment

    def get_shipment(self, shipment_id: str) -> Shipment:
        shipment = self.shipments.find_by_id(shipment_id)
        if shipment is None:
            raise NotFoundError("shipment", shipment_id)
        return shipment

    def shipments_for_vehicle(self, vehicle_id: str) -> list[Shipment]:
        return list(self.shipments.find_by_vehicle_id(vehicle_id))
