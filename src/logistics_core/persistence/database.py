"""Supabase-backed repositories.

Rows are plain column dicts; relations are stored as foreign-key ids and resolved
through the sibling repositories when an entity is loaded. PostgREST errors
(unique violations included) propagate to the caller untouched.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional

from supabase import Client

from ..models.domain import Location, Role, RouteOptimizationResult, Shipment, User, Vehicle

logger = logging.getLogger(__name__)


def _first(response: Any) -> Optional[dict[str, Any]]:
    rows = response.data or []
    return rows[0] if rows else None


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


class _SupabaseTable:
    table_name: str = ""

    def __init__(self, client: Client) -> None:
        self.client = client

    def _table(self):
        return self.client.table(self.table_name)

    def _fetch_one(self, column: str, value: Any) -> Optional[dict[str, Any]]:
        return _first(self._table().select("*").eq(column, value).limit(1).execute())

    def _fetch_many(self, column: str | None = None, value: Any = None) -> list[dict[str, Any]]:
        query = self._table().select("*")
        if column is not None:
            query = query.eq(column, value)
        return list(query.execute().data or [])

    def _write(self, entity_id: Optional[str], record: dict[str, Any]) -> dict[str, Any]:
        if entity_id is None:
            row = _first(self._table().insert(record).execute())
        else:
            row = _first(self._table().update(record).eq("id", entity_id).execute())
        if row is None:
            raise RuntimeError(f"Supabase returned no row when writing to '{self.table_name}'.")
        return row


class SupabaseUserRepository(_SupabaseTable):
    table_name = "users"

    @staticmethod
    def _to_user(row: dict[str, Any]) -> User:
        return User(
            id=str(row["id"]),
            name=row["name"],
            email=row["email"],
            password_hash=row["password_hash"],
            role=Role(row.get("role") or Role.USER.value),
        )

    def find_by_id(self, user_id: str) -> Optional[User]:
        row = self._fetch_one("id", user_id)
        return self._to_user(row) if row else None

    def find_by_email(self, email: str) -> Optional[User]:
        row = self._fetch_one("email", email)
        return self._to_user(row) if row else None

    def save(self, user: User) -> User:
        row = self._write(
            user.id,
            {"name": user.name, "email": user.email, "password_hash": user.password_hash, "role": user.role.value},
        )
        return self._to_user(row)


class SupabaseVehicleRepository(_SupabaseTable):
    table_name = "vehicles"

    @staticmethod
    def _to_vehicle(row: dict[str, Any]) -> Vehicle:
        return Vehicle(
            id=str(row["id"]),
            owner_id=str(row["user_id"]),
            vehicle_number=row["vehicle_number"],
            capacity_kg=float(row["capacity_kg"]),
            fuel_efficiency=float(row["fuel_efficiency"]),
        )

    def find_by_id(self, vehicle_id: str) -> Optional[Vehicle]:
        row = self._fetch_one("id", vehicle_id)
        return self._to_vehicle(row) if row else None

    def find_by_user_id(self, user_id: str) -> list[Vehicle]:
        return [self._to_vehicle(row) for row in self._fetch_many("user_id", user_id)]

    def save(self, vehicle: Vehicle) -> Vehicle:
        row = self._write(
            vehicle.id,
            {
                "user_id": vehicle.owner_id,
                "vehicle_number": vehicle.vehicle_number,
                "capacity_kg": vehicle.capacity_kg,
                "fuel_efficiency": vehicle.fuel_efficiency,
            },
        )
        return self._to_vehicle(row)


class SupabaseLocationRepository(_SupabaseTable):
    table_name = "locations"

    @staticmethod
    def _to_location(row: dict[str, Any]) -> Location:
        return Location(
            id=str(row["id"]),
            name=row.get("name"),
            latitude=float(row["latitude"]),
            longitude=float(row["longitude"]),
        )

    def find_by_id(self, location_id: str) -> Optional[Location]:
        row = self._fetch_one("id", location_id)
        return self._to_location(row) if row else None

    def find_all(self) -> list[Location]:
        return [self._to_location(row) for row in self._fetch_many()]

    def save(self, location: Location) -> Location:
        row = self._write(
            location.id,
            {"name": location.name, "latitude": location.latitude, "longitude": location.longitude},
        )
        return self._to_location(row)


class SupabaseShipmentRepository(_SupabaseTable):
    table_name = "shipments"

    def __init__(
        self,
        client: Client,
        vehicles: SupabaseVehicleRepository,
        locations: SupabaseLocationRepository,
    ) -> None:
        super().__init__(client)
        self.vehicles = vehicles
        self.locations = locations

    def _to_shipment(self, row: dict[str, Any]) -> Shipment:
        vehicle = self.vehicles.find_by_id(str(row["vehicle_id"]))
        pickup = self.locations.find_by_id(str(row["pickup_location_id"]))
        drop = self.locations.find_by_id(str(row["drop_location_id"]))
        if vehicle is None or pickup is None or drop is None:
            raise RuntimeError(f"Shipment {row['id']} references a missing vehicle or location.")
        return Shipment(
            id=str(row["id"]),
            vehicle=vehicle,
            pickup_location=pickup,
            drop_location=drop,
            weight_kg=float(row["weight_kg"]),
            scheduled_date=_parse_date(row["scheduled_date"]),
        )

    def find_by_id(self, shipment_id: str) -> Optional[Shipment]:
        row = self._fetch_one("id", shipment_id)
        return self._to_shipment(row) if row else None

    def find_by_vehicle_id(self, vehicle_id: str) -> list[Shipment]:
        return [self._to_shipment(row) for row in self._fetch_many("vehicle_id", vehicle_id)]

    def save(self, shipment: Shipment) -> Shipment:
        row = self._write(
            shipment.id,
            {
                "vehicle_id": shipment.vehicle.id,
                "pickup_location_id": shipment.pickup_location.id,
                "drop_location_id": shipment.drop_location.id,
                "weight_kg": shipment.weight_kg,
                "scheduled_date": shipment.scheduled_date.isoformat(),
            },
        )
        return self._to_shipment(row)


class SupabaseRouteOptimizationResultRepository(_SupabaseTable):
    table_name = "route_optimization_results"

    def __init__(self, client: Client, shipments: SupabaseShipmentRepository) -> None:
        super().__init__(client)
        self.shipments = shipments

    def _to_result(self, row: dict[str, Any], shipment: Shipment | None = None) -> RouteOptimizationResult:
        shipment = shipment or self.shipments.find_by_id(str(row["shipment_id"]))
        if shipment is None:
            raise RuntimeError(f"Result {row['id']} references missing shipment {row['shipment_id']}.")
        return RouteOptimizationResult(
            id=str(row["id"]),
            shipment=shipment,
            optimized_distance_km=float(row["optimized_distance_km"]),
            estimated_fuel_usage_l=float(row["estimated_fuel_usage_l"]),
            generated_at=_parse_datetime(row["generated_at"]),
        )

    def find_by_id(self, result_id: str) -> Optional[RouteOptimizationResult]:
        row = self._fetch_one("id", result_id)
        return self._to_result(row) if row else None

    def save(self, result: RouteOptimizationResult) -> RouteOptimizationResult:
        row = self._write(
            result.id,
            {
                "shipment_id": result.shipment.id,
                "optimized_distance_km": result.optimized_distance_km,
                "estimated_fuel_usage_l": result.estimated_fuel_usage_l,
                "generated_at": result.generated_at.isoformat(),
            },
        )
        logger.debug("Stored route optimization result %s for shipment %s", row.get("id"), result.shipment.id)
        return self._to_result(row, shipment=result.shipment)
