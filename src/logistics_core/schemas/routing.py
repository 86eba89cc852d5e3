"""Route optimization response schema."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from ..models.domain import RouteOptimizationResult


class RouteOptimizationResultModel(BaseModel):
    id: str
    shipment_id: str
    optimized_distance_km: float
    estimated_fuel_usage_l: float
    generated_at: datetime

    @classmethod
    def from_domain(cls, result: RouteOptimizationResult) -> "RouteOptimizationResultModel":
        return cls(
            id=result.id,
            shipment_id=result.shipment.id,
            optimized_distance_km=result.optimized_distance_km,
            estimated_fuel_usage_l=result.estimated_fuel_usage_l,
            generated_at=result.generated_at,
        )
