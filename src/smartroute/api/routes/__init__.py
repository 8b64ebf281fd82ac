"""Route group exports."""

from . import health, orders, routes, state, stops, vehicles

__all__ = ["health", "state", "stops", "orders", "routes", "vehicles"]
