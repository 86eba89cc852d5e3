"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..dependencies import Services, get_services

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root(services: Services = Depends(get_services)) -> dict:
    """Liveness check; reports which storage backend is wired in."""
    return {"status": "ok", "storage": services.backend}
