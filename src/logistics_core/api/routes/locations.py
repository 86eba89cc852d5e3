"""Location endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import LogisticsError
from ...models.domain import TokenClaims
from ...schemas.fleet import LocationCreate, LocationModel
from ...services.auth.permissions import Permission
from ..dependencies import Services, get_services, requires, to_http_exception

router = APIRouter(prefix="/locations", tags=["locations"])


@router.post("", response_model=LocationModel, status_code=status.HTTP_201_CREATED)
def create_location(
    payload: LocationCreate,
    services: Services = Depends(get_services),
    claims: TokenClaims = Depends(requires(Permission.MANAGE_LOCATIONS)),
) -> LocationModel:
    try:
        location = services.locations.create_location(payload.latitude, payload.longitude, name=payload.name)
    except LogisticsError as exc:
        raise to_http_exception(exc) from exc
    except Exception as exc:
        logging.exception(f"Error creating location: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create location: {str(exc)}",
        ) from exc
    return LocationModel.from_domain(location)


@router.get("", response_model=list[LocationModel], status_code=status.HTTP_200_OK)
def list_locations(
    services: Services = Depends(get_services),
    claims: TokenClaims = Depends(requires(Permission.VIEW_LOCATIONS)),
) -> list[LocationModel]:
    return [LocationModel.from_domain(location) for location in services.locations.list_locations()]
