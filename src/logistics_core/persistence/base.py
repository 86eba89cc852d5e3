"""Repository contracts consumed by the services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from ..models.domain import Location, RouteOptimizationResult, Shipment, User, Vehicle


class UserRepository(Protocol):
    def find_by_id(self, user_id: str) -> Optional[User]: ...

    def find_by_email(self, email: str) -> Optional[User]: ...

    def save(self, user: User) -> User: ...


class VehicleRepository(Protocol):
    def find_by_id(self, vehicle_id: str) -> Optional[Vehicle]: ...

    def find_by_user_id(self, user_id: str) -> Sequence[Vehicle]: ...

    def save(self, vehicle: Vehicle) -> Vehicle: ...


class LocationRepository(Protocol):
    def find_by_id(self, location_id: str) -> Optional[Location]: ...

    def find_all(self) -> Sequence[Location]: ...

    def save(self, location: Location) -> Location: ...


class ShipmentRepository(Protocol):
    def find_by_id(self, shipment_id: str) -> Optional[Shipment]: ...

    def find_by_vehicle_id(self, vehicle_id: str) -> Sequence[Shipment]: ...

    def save(self, shipment: Shipment) -> Shipment: ...


class RouteOptimizationResultRepository(Protocol):
    def find_by_id(self, result_id: str) -> Optional[RouteOptimizationResult]: ...

    def save(self, result: RouteOptimizationResult) -> RouteOptimizationResult: ...


@dataclass(slots=True)
class Repositories:
    """One repository per entity type, sharing a single backend."""

    users: UserRepository
    vehicles: VehicleRepository
    locations: LocationRepository
    shipments: ShipmentRepository
    results: RouteOptimizationResultRepository
    backend: str = "memory"
