"""Guards for vehicle, location and shipment invariants.

Each guard returns ``None`` when the value is acceptable and raises
``InvalidArgumentError`` otherwise. They never touch storage.
"""

from __future__ import annotations

import math
from datetime import date

from ..errors import InvalidArgumentError

MIN_LATITUDE, MAX_LATITUDE = -90.0, 90.0
MIN_LONGITUDE, MAX_LONGITUDE = -180.0, 180.0


def _is_finite(value: float) -> bool:
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def validate_capacity(capacity_kg: float) -> None:
    if not _is_finite(capacity_kg) or capacity_kg <= 0:
        raise InvalidArgumentError(f"Vehicle capacity must be greater than 0 kg (got {capacity_kg}).")


def validate_fuel_efficiency(fuel_efficiency: float) -> None:
    if not _is_finite(fuel_efficiency) or fuel_efficiency <= 0:
        raise InvalidArgumentError(f"Vehicle fuel efficiency must be greater than 0 (got {fuel_efficiency}).")


def validate_coordinates(latitude: float, longitude: float) -> None:
    if not _is_finite(latitude) or not MIN_LATITUDE <= latitude <= MAX_LATITUDE:
        raise InvalidArgumentError(f"Invalid latitude {latitude}: must be between -90 and 90.")
    if not _is_finite(longitude) or not MIN_LONGITUDE <= longitude <= MAX_LONGITUDE:
        raise InvalidArgumentError(f"Invalid longitude {longitude}: must be between -180 and 180.")


def validate_weight(weight_kg: float, vehicle_capacity_kg: float) -> None:
    if not _is_finite(weight_kg) or weight_kg <= 0:
        raise InvalidArgumentError(f"Shipment weight must be greater than 0 kg (got {weight_kg}).")
    if weight_kg > vehicle_capacity_kg:
        raise InvalidArgumentError(
            f"Shipment weight {weight_kg} kg exceeds vehicle capacity of {vehicle_capacity_kg} kg."
        )


def validate_scheduled_date(scheduled: date, today: date) -> None:
    """Same-day shipments are allowed; strictly earlier dates are not."""
    if scheduled < today:
        raise InvalidArgumentError(f"Scheduled date {scheduled.isoformat()} is in the past.")
