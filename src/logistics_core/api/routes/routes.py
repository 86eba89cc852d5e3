"""Route optimization endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import LogisticsError
from ...models.domain import TokenClaims
from ...schemas.routing import RouteOptimizationResultModel
from ...services.auth.permissions import Permission
from ..dependencies import Services, get_services, requires, to_http_exception
from .vehicles import ensure_vehicle_access

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post(
    "/optimize/{shipment_id}",
    response_model=RouteOptimizationResultModel,
    status_code=status.HTTP_201_CREATED,
)
def optimize(
    shipment_id: str,
    services: Services = Depends(get_services),
    claims: TokenClaims = Depends(requires(Permission.OPTIMIZE_ROUTES)),
) -> RouteOptimizationResultModel:
    try:
        ensure_vehicle_access(claims, services.shipments.get_shipment(shipment_id).vehicle)
        result = services.routing.optimize_route(shipment_id)
    except LogisticsError as exc:
        raise to_http_exception(exc) from exc
    except HTTPException:
        raise
    except Exception as exc:
        logging.exception(f"Error optimizing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {str(exc)}",
        ) from exc
    return RouteOptimizationResultModel.from_domain(result)


@router.get("/results/{result_id}", response_model=RouteOptimizationResultModel, status_code=status.HTTP_200_OK)
def get_result(
    result_id: str,
    services: Services = Depends(get_services),
    claims: TokenClaims = Depends(requires(Permission.VIEW_ROUTES)),
) -> RouteOptimizationResultModel:
    try:
        result = services.routing.get_result(result_id)
    except LogisticsError as exc:
        raise to_http_exception(exc) from exc
    ensure_vehicle_access(claims, result.shipment.vehicle)
    return RouteOptimizationResultModel.from_domain(result)
