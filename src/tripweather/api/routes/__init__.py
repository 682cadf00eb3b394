"""Route group exports."""

from . import ev_charging, health, location, route, saved_routes, timezone, weather

__all__ = ["route", "saved_routes", "health", "location", "timezone", "weather", "ev_charging"]
