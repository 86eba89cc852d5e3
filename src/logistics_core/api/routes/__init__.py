"""Route group exports."""

from . import auth, health, locations, routes, shipments, vehicles

__all__ = ["auth", "health", "locations", "routes", "shipments", "vehicles"]
