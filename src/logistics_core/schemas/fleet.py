"""Vehicle, location and shipment schemas."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from ..models.domain import Location, Shipment, Vehicle


class VehicleCreate(BaseModel):
    vehicle_number: str = Field(..., min_length=1)
    capacity_kg: float = Field(..., description="Maximum load in kilograms; must be > 0.")
    fuel_efficiency: float = Field(..., description="Kilometres per litre; must be > 0.")
    owner_id: Optional[str] = Field(default=None, description="Defaults to the calling user.")


class VehicleModel(BaseModel):
    id: str
    owner_id: str
    vehicle_number: str
    capacity_kg: float
    fuel_efficiency: float

    @classmethod
    def from_domain(cls, vehicle: Vehicle) -> "VehicleModel":
        return cls(
            id=vehicle.id,
            owner_id=vehicle.owner_id,
            vehicle_number=vehicle.vehicle_number,
            capacity_kg=vehicle.capacity_kg,
            fuel_efficiency=vehicle.fuel_efficiency,
        )


class LocationCreate(BaseModel):
    name: Optional[str] = None
    latitude: float
    longitude: float


class LocationModel(BaseModel):
    id: str
    name: Optional[str]
    latitude: float
    longitude: float

    @classmethod
    def from_domain(cls, location: Location) -> "LocationModel":
        return cls(id=location.id, name=location.name, latitude=location.latitude, longitude=location.longitude)


class ShipmentCreate(BaseModel):
    vehicle_id: str
    pickup_location_id: str
    drop_location_id: str
    weight_kg: float
    scheduled_date: date


class ShipmentModel(BaseModel):
    id: str
    vehicle: VehicleModel
    pickup_location: LocationModel
    drop_location: LocationModel
    weight_kg: float
    scheduled_date: date

    @classmethod
    def from_domain(cls, shipment: Shipment) -> "ShipmentModel":
        return cls(
            id=shipment.id,
            vehicle=VehicleModel.from_domain(shipment.vehicle),
            pickup_location=LocationModel.from_domain(shipment.pickup_location),
            drop_location=LocationModel.from_domain(shipment.drop_location),
            weight_kg=shipment.weight_kg,
            scheduled_date=shipment.scheduled_date,
        )
