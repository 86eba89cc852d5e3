"""Route distance and fuel estimation for stored shipments."""

from __future__ import annotations

import logging

from ...errors import NotFoundError
from ...models.domain import RouteOptimizationResult
from ...persistence.base import RouteOptimizationResultRepository, ShipmentRepository
from ..clock import Clock, utc_now
from ..geospatial import route_distance_km

logger = logging.getLogger(__name__)


class RouteOptimizationService:
    def __init__(
        self,
        shipments: ShipmentRepository,
        results: RouteOptimizationResultRepository,
        clock: Clock = utc_now,
        distance_metric: str = "planar",
    ) -> None:
        self.shipments = shipments
        self.results = results
        self.clock = clock
        self.distance_metric = distance_metric

    def optimize_route(self, shipment_id: str) -> RouteOptimizationResult:
        """Compute pickup-to-drop distance and fuel usage, then store a new result.

        Fuel efficiency is validated when the vehicle is registered, so the
        division is not re-checked here. A failed save discards the computed
        figures.
        """
        shipment = self.shipments.find_by_id(shipment_id)
        if shipment is None:
            raise NotFoundError("shipment", shipment_id)

        distance_km = route_distance_km(
            shipment.pickup_location.coordinate,
            shipment.drop_location.coordinate,
            self.distance_metric,
        )
        fuel_usage_l = distance_km / shipment.vehicle.fuel_efficiency

        result = self.results.save(
            RouteOptimizationResult(
                shipment=shipment,
                optimized_distance_km=distance_km,
                estimated_fuel_usage_l=fuel_usage_l,
                generated_at=self.clock(),
            )
        )
        logger.info(
            "Optimized route for shipment %s: %.4f km, %.4f L (result %s)",
            shipment_id,
            distance_km,
            fuel_usage_l,
            result.id,
        )
        return result

    def get_result(self, result_id: str) -> RouteOptimizationResult:
        result = self.results.find_by_id(result_id)
        if result is None:
            raise NotFoundError("result", result_id)
        return result
