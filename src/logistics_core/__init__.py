"""Logistics domain layer: shipment validation, route metrics and token auth."""

__version__ = "0.1.0"
