"""In-process repositories backed by dictionaries."""

from __future__ import annotations

import threading
import uuid
from dataclasses import replace
from typing import Callable, Generic, Optional, TypeVar

from ..errors import ConstraintViolationError
from ..models.domain import Location, RouteOptimizationResult, Shipment, User, Vehicle

T = TypeVar("T", User, Vehicle, Location, Shipment, RouteOptimizationResult)


def _new_id() -> str:
    return uuid.uuid4().hex


class _MemoryStore(Generic[T]):
    """Keyed store that assigns ids on first save and copies entities in and out."""

    def __init__(self, id_factory: Callable[[], str] = _new_id) -> None:
        self._rows: dict[str, T] = {}
        self._lock = threading.Lock()
        self._id_factory = id_factory

    def get(self, entity_id: str) -> Optional[T]:
        with self._lock:
            row = self._rows.get(entity_id)
            return replace(row) if row is not None else None

    def select(self, predicate: Callable[[T], bool]) -> list[T]:
        with self._lock:
            return [replace(row) for row in self._rows.values() if predicate(row)]

    def put(self, entity: T, unique: Callable[[T, T], bool] | None = None, constraint: str = "") -> T:
        with self._lock:
            entity_id = entity.id or self._id_factory()
            if unique is not None:
                for existing_id, row in self._rows.items():
                    if existing_id != entity_id and unique(row, entity):
                        raise ConstraintViolationError(f"duplicate key value violates unique constraint '{constraint}'")
            stored = replace(entity, id=entity_id)
            self._rows[entity_id] = stored
            return replace(stored)

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)


class InMemoryUserRepository:
    def __init__(self) -> None:
        self._store: _MemoryStore[User] = _MemoryStore()

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self._store.get(user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        matches = self._store.select(lambda user: user.email == email)
        return matches[0] if matches else None

    def save(self, user: User) -> User:
        return self._store.put(user, unique=lambda a, b: a.email == b.email, constraint="users_email_key")


class InMemoryVehicleRepository:
    def __init__(self) -> None:
        self._store: _MemoryStore[Vehicle] = _MemoryStore()

    def find_by_id(self, vehicle_id: str) -> Optional[Vehicle]:
        return self._store.get(vehicle_id)

    def find_by_user_id(self, user_id: str) -> list[Vehicle]:
        return self._store.select(lambda vehicle: vehicle.owner_id == user_id)

    def save(self, vehicle: Vehicle) -> Vehicle:
        return self._store.put(
            vehicle,
            unique=lambda a, b: a.vehicle_number == b.vehicle_number,
            constraint="vehicles_vehicle_number_key",
        )


class InMemoryLocationRepository:
    def __init__(self) -> None:
        self._store: _MemoryStore[Location] = _MemoryStore()

    def find_by_id(self, location_id: str) -> Optional[Location]:
        return self._store.get(location_id)

    def find_all(self) -> list[Location]:
        return self._store.select(lambda _: True)

    def save(self, location: Location) -> Location:
        return self._store.put(location)


class InMemoryShipmentRepository:
    def __init__(self) -> None:
        self._store: _MemoryStore[Shipment] = _MemoryStore()

    def find_by_id(self, shipment_id: str) -> Optional[Shipment]:
        return self._store.get(shipment_id)

    def find_by_vehicle_id(self, vehicle_id: str) -> list[Shipment]:
        return self._store.select(lambda shipment: shipment.vehicle.id == vehicle_id)

    def save(self, shipment: Shipment) -> Shipment:
        return self._store.put(shipment)


class InMemoryRouteOptimizationResultRepository:
    def __init__(self) -> None:
        self._store: _MemoryStore[RouteOptimizationResult] = _MemoryStore()

    def find_by_id(self, result_id: str) -> Optional[RouteOptimizationResult]:
        return self._store.get(result_id)

    def save(self, result: RouteOptimizationResult) -> RouteOptimizationResult:
        return self._store.put(result)

    def __len__(self) -> int:
        return len(self._store)
