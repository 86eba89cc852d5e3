"""Service wiring and request dependencies."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from ..config import Settings, settings
from ..errors import (
    AuthenticationError,
    ConstraintViolationError,
    InvalidArgumentError,
    LogisticsError,
    NotFoundError,
    PermissionDeniedError,
)
from ..models.domain import Role, TokenClaims
from ..persistence.base import Repositories
from ..services.auth.passwords import PasslibPasswordHasher
from ..services.auth.permissions import Permission, require_permission
from ..services.auth.service import AuthService
from ..services.clock import Clock, utc_now
from ..services.fleet.service import FleetService
from ..services.locations.service import LocationService
from ..services.routing.service import RouteOptimizationService
from ..services.shipments.service import ShipmentService
from ..services.users.service import UserService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.api_prefix}/auth/login", auto_error=False)


@dataclass(slots=True)
class Services:
    users: UserService
    auth: AuthService
    fleet: FleetService
    locations: LocationService
    shipments: ShipmentService
    routing: RouteOptimizationService
    backend: str


def build_services(config: Settings, repositories: Repositories, clock: Clock = utc_now) -> Services:
    hasher = PasslibPasswordHasher(config.password_schemes)
    users = UserService(repositories.users, hasher, default_role=Role(config.default_role))
    return Services(
        users=users,
        auth=AuthService(config.auth_config(), users=users, clock=clock),
        fleet=FleetService(repositories.vehicles, repositories.users),
        locations=LocationService(repositories.locations),
        shipments=ShipmentService(repositories.shipments, repositories.vehicles, repositories.locations, clock=clock),
        routing=RouteOptimizationService(
            repositories.shipments,
            repositories.results,
            clock=clock,
            distance_metric=config.distance_metric,
        ),
        backend=repositories.backend,
    )


def get_services(request: Request) -> Services:
    return request.app.state.services


def to_http_exception(exc: LogisticsError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, InvalidArgumentError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, AuthenticationError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        )
    if isinstance(exc, PermissionDeniedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    if isinstance(exc, ConstraintViolationError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    logging.error(f"Unhandled domain error: {exc}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


def get_current_claims(
    token: str | None = Depends(oauth2_scheme),
    services: Services = Depends(get_services),
) -> TokenClaims:
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return services.auth.verify_token(token)
    except AuthenticationError as exc:
        raise to_http_exception(exc) from exc


def requires(permission: Permission):
    """Dependency factory that rejects callers whose role lacks ``permission``."""

    def _check(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
        try:
            require_permission(claims, permission)
        except PermissionDeniedError as exc:
            raise to_http_exception(exc) from exc
        return claims

    return _check
