"""Geospatial helper functions."""

from __future__ import annotations

import math

from shapely.geometry import Point

from ..models.domain import Coordinate

EARTH_RADIUS_KM = 6371.0


def distance(a: Coordinate, b: Coordinate) -> float:
    """Planar Euclidean distance between two coordinates.

    Latitude and longitude are treated as plane coordinates, so the result is in
    "degree units" rather than true kilometres. This is the contract route
    optimization reports as ``optimized_distance_km``; see ``haversine_km`` for
    the geodesic figure.
    """

    if a == b:
        return 0.0
    return Point(a.longitude, a.latitude).distance(Point(b.longitude, b.latitude))


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def route_distance_km(a: Coordinate, b: Coordinate, metric: str = "planar") -> float:
    if metric == "planar":
        return distance(a, b)
    if metric == "haversine":
        return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)
    raise ValueError(f"Unknown distance metric '{metric}'.")
