"""Repository construction for the configured storage backend."""

from __future__ import annotations

import logging

from ..config import Settings
from ..db.supabase import get_supabase_client
from .base import Repositories
from .memory import (
    InMemoryLocationRepository,
    InMemoryRouteOptimizationResultRepository,
    InMemoryShipmentRepository,
    InMemoryUserRepository,
    InMemoryVehicleRepository,
)

logger = logging.getLogger(__name__)


def in_memory_repositories() -> Repositories:
    return Repositories(
        users=InMemoryUserRepository(),
        vehicles=InMemoryVehicleRepository(),
        locations=InMemoryLocationRepository(),
        shipments=InMemoryShipmentRepository(),
        results=InMemoryRouteOptimizationResultRepository(),
        backend="memory",
    )


def build_repositories(config: Settings) -> Repositories:
    """Use Supabase when it is configured and reachable as a client, memory otherwise."""

    client = get_supabase_client(config.supabase_url, config.supabase_key)
    if client is None:
        logger.info("Using in-memory repositories")
        return in_memory_repositories()

    from .database import (
        SupabaseLocationRepository,
        SupabaseRouteOptimizationResultRepository,
        SupabaseShipmentRepository,
        SupabaseUserRepository,
        SupabaseVehicleRepository,
    )

    vehicles = SupabaseVehicleRepository(client)
    locations = SupabaseLocationRepository(client)
    shipments = SupabaseShipmentRepository(client, vehicles=vehicles, locations=locations)
    logger.info("Using Supabase repositories")
    return Repositories(
        users=SupabaseUserRepository(client),
        vehicles=vehicles,
        locations=locations,
        shipments=shipments,
        results=SupabaseRouteOptimizationResultRepository(client, shipments=shipments),
        backend="supabase",
    )


__all__ = ["Repositories", "build_repositories", "in_memory_repositories"]
