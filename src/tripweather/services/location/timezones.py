"""Coordinate to IANA time-zone resolution with a thread-safe cache."""

from __future__ import annotations

import logging
import math
import threading
from collections import OrderedDict
from typing import Callable, Optional, Sequence

from ...config import settings
from ...models.domain import Waypoint
from ..scheduling.clock import is_valid_timezone

logger = logging.getLogger(__name__)

Resolver = Callable[[float, float], Optional[str]]

# (west bound inclusive, east bound exclusive, zone)
_US_LONGITUDE_BANDS = (
    (-125.0, -115.0, "America/Los_Angeles"),
    (-115.0, -105.0, "America/Denver"),
    (-105.0, -90.0, "America/Chicago"),
    (-90.0, -75.0, "America/New_York"),
    (-75.0, -65.0, "America/Halifax"),
)


def approximate_timezone(longitude: float) -> str:
    """Rough zone from longitude: US bands first, otherwise a fixed ``Etc/GMT`` offset."""
    for west, east, zone in _US_LONGITUDE_BANDS:
        if west <= longitude < east:
            return zone
    offset = math.floor(longitude / 15.0 + 0.5)
    if offset == 0:
        return "UTC"
    if -12 <= offset <= 14:
        # Etc/GMT names use POSIX sign convention: Etc/GMT-5 is five hours east of Greenwich
        return f"Etc/GMT{-offset:+d}"
    return "UTC"


class TimezoneLookup:
    """Resolve zones for coordinates, caching answers by ``"lat,lon"``.

    Safe for concurrent use; the cache is the only shared state and every
    access holds the lock.
    """

    def __init__(
        self,
        resolver: Optional[Resolver] = None,
        fallback: str = "UTC",
        approximate: bool = True,
        max_entries: Optional[int] = None,
    ) -> None:
        self.resolver = resolver
        self.fallback = fallback
        self.approximate = approximate
        self.max_entries = max_entries or settings.timezone_cache_size
        self._cache: OrderedDict[str, str] = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def cache_key(latitude: float, longitude: float) -> str:
        return f"{latitude},{longitude}"

    def _get_cached(self, key: str) -> Optional[str]:
        with self._lock:
            zone = self._cache.get(key)
            if zone is not None:
                self._cache.move_to_end(key)
            return zone

    def _store(self, key: str, zone: str) -> None:
        with self._lock:
            self._cache[key] = zone
            self._cache.move_to_end(key)
            while len(self._cache) > self.max_entries:
                self._cache.popitem(last=False)

    def _resolve(self, latitude: float, longitude: float) -> Optional[str]:
        if self.resolver is None:
            return None
        try:
            zone = self.resolver(latitude, longitude)
        except Exception as exc:
            logger.warning(f"Error getting timezone for coordinates {latitude}, {longitude}: {exc}")
            return None
        if zone and is_valid_timezone(zone):
            return zone
        if zone:
            logger.warning(f"Resolver returned unknown time zone '{zone}' for {latitude}, {longitude}")
        return None

    def lookup(self, latitude: float, longitude: float) -> str:
        key = self.cache_key(latitude, longitude)
        cached = self._get_cached(key)
        if cached is not None:
            return cached

        zone = self._resolve(latitude, longitude)
        if zone is not None:
            self._store(key, zone)
            return zone

        # only resolver answers are cached
        if self.approximate:
            return approximate_timezone(longitude)
        return self.fallback

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)


def resolve_waypoints(waypoints: Sequence[Waypoint], lookup: TimezoneLookup) -> list[Waypoint]:
    """Return waypoints with every missing zone filled in by ``lookup``."""
    resolved: list[Waypoint] = []
    for waypoint in waypoints:
        if waypoint.timezone and waypoint.timezone.strip():
            resolved.append(waypoint)
        else:
            resolved.append(waypoint.with_timezone(lookup.lookup(waypoint.latitude, waypoint.longitude)))
    return resolved
