"""Fleet endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import LogisticsError
from ...models.domain import TokenClaims, Vehicle
from ...schemas.fleet import ShipmentModel, VehicleCreate, VehicleModel
from ...services.auth.permissions import Permission, has_permission
from ..dependencies import Services, get_services, requires, to_http_exception

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


def ensure_vehicle_access(claims: TokenClaims, vehicle: Vehicle) -> None:
    """Owners may act on their own vehicles; fleet managers on any."""
    if vehicle.owner_id != claims.user_id and not has_permission(claims, Permission.MANAGE_ANY_FLEET):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Vehicle {vehicle.id} does not belong to the current user",
        )


@router.post("", response_model=VehicleModel, status_code=status.HTTP_201_CREATED)
def add_vehicle(
    payload: VehicleCreate,
    services: Services = Depends(get_services),
    claims: TokenClaims = Depends(requires(Permission.MANAGE_OWN_FLEET)),
) -> VehicleModel:
    owner_id = payload.owner_id or claims.user_id
    if owner_id != claims.user_id and not has_permission(claims, Permission.MANAGE_ANY_FLEET):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only fleet managers may register vehicles for other users",
        )
    try:
        vehicle = services.fleet.add_vehicle(
            owner_id=owner_id,
            vehicle_number=payload.vehicle_number,
            capacity_kg=payload.capacity_kg,
            fuel_efficiency=payload.fuel_efficiency,
        )
    except LogisticsError as exc:
        raise to_http_exception(exc) from exc
    except Exception as exc:
        logging.exception(f"Error adding vehicle: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to add vehicle: {str(exc)}",
        ) from exc
    return VehicleModel.from_domain(vehicle)


@router.get("", response_model=list[VehicleModel], status_code=status.HTTP_200_OK)
def list_vehicles(
    services: Services = Depends(get_services),
    claims: TokenClaims = Depends(requires(Permission.MANAGE_OWN_FLEET)),
) -> list[VehicleModel]:
    """Vehicles owned by the calling user."""
    return [VehicleModel.from_domain(vehicle) for vehicle in services.fleet.vehicles_for_user(claims.user_id)]


@router.get("/{vehicle_id}/shipments", response_model=list[ShipmentModel], status_code=status.HTTP_200_OK)
def list_vehicle_shipments(
    vehicle_id: str,
    services: Services = Depends(get_services),
    claims: TokenClaims = Depends(requires(Permission.VIEW_SHIPMENTS)),
) -> list[ShipmentModel]:
    try:
        vehicle = services.fleet.get_vehicle(vehicle_id)
    except LogisticsError as exc:
        raise to_http_exception(exc) from exc
    ensure_vehicle_access(claims, vehicle)
    return [ShipmentModel.from_domain(shipment) for shipment in services.shipments.shipments_for_vehicle(vehicle_id)]
