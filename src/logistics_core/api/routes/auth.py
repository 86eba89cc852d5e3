"""Registration, login and token introspection endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import LogisticsError
from ...models.domain import TokenClaims
from ...schemas.auth import ClaimsModel, LoginRequest, RegisterRequest, TokenResponse, UserCreate, UserModel
from ...services.auth.permissions import Permission
from ..dependencies import Services, get_current_claims, get_services, requires, to_http_exception

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserModel, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, services: Services = Depends(get_services)) -> UserModel:
    """Self-service sign-up; the account always gets the default role."""
    try:
        user = services.users.register(payload.name, payload.email, payload.password)
    except LogisticsError as exc:
        raise to_http_exception(exc) from exc
    except Exception as exc:
        logging.exception(f"Error registering user: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to register user: {str(exc)}",
        ) from exc
    return UserModel.from_domain(user)


@router.post("/users", response_model=UserModel, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    services: Services = Depends(get_services),
    claims: TokenClaims = Depends(requires(Permission.MANAGE_USERS)),
) -> UserModel:
    try:
        user = services.users.register(payload.name, payload.email, payload.password, role=payload.role)
    except LogisticsError as exc:
        raise to_http_exception(exc) from exc
    except Exception as exc:
        logging.exception(f"Error creating user: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create user: {str(exc)}",
        ) from exc
    logging.info(f"User {claims.user_id} created user {user.id} with role {user.role.value}")
    return UserModel.from_domain(user)


@router.post("/login", response_model=TokenResponse, status_code=status.HTTP_200_OK)
def login(payload: LoginRequest, services: Services = Depends(get_services)) -> TokenResponse:
    try:
        token = services.auth.login(payload.email, payload.password)
    except LogisticsError as exc:
        raise to_http_exception(exc) from exc
    return TokenResponse(access_token=token)


@router.get("/me", response_model=ClaimsModel, status_code=status.HTTP_200_OK)
def me(claims: TokenClaims = Depends(get_current_claims)) -> ClaimsModel:
    return ClaimsModel.from_domain(claims)
