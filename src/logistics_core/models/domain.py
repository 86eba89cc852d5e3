"""Domain models for users, fleet, locations and shipments."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import NamedTuple, Optional


class Role(str, Enum):
    USER = "USER"
    DRIVER = "DRIVER"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"


class Coordinate(NamedTuple):
    latitude: float
    longitude: float


@dataclass(slots=True)
class User:
    """Registered account. Only the password hash is ever stored."""

    name: str
    email: str
    password_hash: str
    role: Role = Role.USER
    id: Optional[str] = None


@dataclass(slots=True)
class Vehicle:
    """Fleet vehicle owned by exactly one user."""

    owner_id: str
    vehicle_number: str
    capacity_kg: float
    fuel_efficiency: float  # km per litre
    id: Optional[str] = None


@dataclass(slots=True)
class Location:
    latitude: float
    longitude: float
    name: Optional[str] = None
    id: Optional[str] = None

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)


@dataclass(slots=True)
class Shipment:
    """A load carried by one vehicle between two resolved locations."""

    vehicle: Vehicle
    pickup_location: Location
    drop_location: Location
    weight_kg: float
    scheduled_date: date
    id: Optional[str] = None


@dataclass(slots=True)
class RouteOptimizationResult:
    shipment: Shipment
    optimized_distance_km: float
    estimated_fuel_usage_l: float
    generated_at: datetime
    id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """Payload carried by a signed access token."""

    user_id: str
    email: str
    role: Role
    issued_at: datetime
    expires_at: datetime
