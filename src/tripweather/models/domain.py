"""Domain models for waypoints, provider segments and computed itineraries."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional


@dataclass(frozen=True, slots=True)
class Waypoint:
    """A stop on a route as supplied by the caller."""

    latitude: float
    longitude: float
    name: str = ""
    timezone: Optional[str] = None
    dwell_minutes: int = 0

    @property
    def applied_dwell(self) -> int:
        return max(self.dwell_minutes or 0, 0)

    def with_timezone(self, timezone: str) -> "Waypoint":
        return replace(self, timezone=timezone)


@dataclass(frozen=True, slots=True)
class Segment:
    """Travel leg between two consecutive waypoints (meters, seconds)."""

    distance: Optional[float] = None
    duration: Optional[float] = None


@dataclass(frozen=True, slots=True)
class ScheduledWaypoint:
    location: tuple[float, float]
    name: str
    timezone: Optional[str]
    duration: int
    arrival_time: Optional[str] = None
    departure_time: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ProviderRoute:
    """Parsed routing provider output."""

    geometry: tuple[tuple[float, float], ...]
    distance: Optional[float]
    duration: Optional[float]
    segments: tuple[Segment, ...]


@dataclass(frozen=True, slots=True)
class RouteData:
    """Itinerary-bearing route result returned to API callers."""

    geometry: tuple[tuple[float, float], ...] = ()
    distance: Optional[float] = 0.0
    duration: Optional[float] = 0.0
    segments: tuple[Segment, ...] = ()
    waypoints: tuple[ScheduledWaypoint, ...] = ()
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return len(self.geometry) > 0


@dataclass(frozen=True, slots=True)
class WeatherData:
    condition: Optional[str] = None
    temperature: Optional[int] = None
    temperature_unit: Optional[str] = None
    wind_speed: Optional[str] = None
    wind_direction: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def create_error(cls, message: str) -> "WeatherData":
        return cls(error=message)


@dataclass(frozen=True, slots=True)
class TimezoneInfo:
    name: Optional[str] = None
    offset_std: Optional[str] = None
    offset_dst: Optional[str] = None
    abbreviation_std: Optional[str] = None
    abbreviation_dst: Optional[str] = None


@dataclass(frozen=True, slots=True)
class LocationData:
    """Reverse-geocoding result reduced to the fields the API exposes."""

    formatted: Optional[str] = None
    timezone: Optional[TimezoneInfo] = None
    raw: dict = field(default_factory=dict)
