"""FastAPI application entry point."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.dependencies import build_services
from .api.routes import auth, health, locations, routes, shipments, vehicles
from .config import Settings, settings
from .persistence import build_repositories
from .persistence.base import Repositories
from .services.clock import Clock, utc_now


def create_app(
    config: Optional[Settings] = None,
    repositories: Optional[Repositories] = None,
    clock: Clock = utc_now,
) -> FastAPI:
    config = config or settings
    logging.basicConfig(level=config.log_level.upper())

    app = FastAPI(title=config.app_name)
    app.state.services = build_services(config, repositories or build_repositories(config), clock=clock)

    if config.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(config.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/")
    def root():
        return {
            "service": config.app_name,
            "status": "running",
            "api_prefix": config.api_prefix,
            "health": f"{config.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=config.api_prefix)
    app.include_router(auth.router, prefix=config.api_prefix)
    app.include_router(vehicles.router, prefix=config.api_prefix)
    app.include_router(locations.router, prefix=config.api_prefix)
    app.include_router(shipments.router, prefix=config.api_prefix)
    app.include_router(routes.router, prefix=config.api_prefix)
    return app


app = create_app()
