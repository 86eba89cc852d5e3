"""Shipment endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import LogisticsError
from ...models.domain import TokenClaims
from ...schemas.fleet import ShipmentCreate, ShipmentModel
from ...services.auth.permissions import Permission
from ...services.shipments.service import ShipmentDraft
from ..dependencies import Services, get_services, requires, to_http_exception
from .vehicles import ensure_vehicle_access

router = APIRouter(prefix="/shipments", tags=["shipments"])


@router.post("", response_model=ShipmentModel, status_code=status.HTTP_201_CREATED)
def create_shipment(
    payload: ShipmentCreate,
    services: Services = Depends(get_services),
    claims: TokenClaims = Depends(requires(Permission.CREATE_SHIPMENTS)),
) -> ShipmentModel:
    draft = ShipmentDraft(
        pickup_location_id=payload.pickup_location_id,
        drop_location_id=payload.drop_location_id,
        weight_kg=payload.weight_kg,
        scheduled_date=payload.scheduled_date,
    )
    try:
        ensure_vehicle_access(claims, services.fleet.get_vehicle(payload.vehicle_id))
        shipment = services.shipments.create_shipment(payload.vehicle_id, draft)
    except LogisticsError as exc:
        raise to_http_exception(exc) from exc
    except HTTPException:
        raise
    except Exception as exc:
        logging.exception(f"Error creating shipment: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create shipment: {str(exc)}",
        ) from exc
    return ShipmentModel.from_domain(shipment)


@router.get("/{shipment_id}", response_model=ShipmentModel, status_code=status.HTTP_200_OK)
def get_shipment(
    shipment_id: str,
    services: Services = Depends(get_services),
    claims: TokenClaims = Depends(requires(Permission.VIEW_SHIPMENTS)),
) -> ShipmentModel:
    try:
        shipment = services.shipments.get_shipment(shipment_id)
    except LogisticsError as exc:
        raise to_http_exception(exc) from exc
    ensure_vehicle_access(claims, shipment.vehicle)
    return ShipmentModel.from_domain(shipment)
