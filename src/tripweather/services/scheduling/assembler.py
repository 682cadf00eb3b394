"""Merge routing provider output with the computed itinerary."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from ...models.domain import ProviderRoute, RouteData, Segment, Waypoint
from .builder import Clock, ScheduleError, build_schedule, untimed_itinerary
from .errors import UpstreamUnavailable

logger = logging.getLogger(__name__)


def _as_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_directions(payload: Any) -> ProviderRoute:
    """Extract geometry, summary and segments from a GeoJSON directions response.

    Coordinates may carry a third elevation value; only ``[lon, lat]`` is kept.
    """
    if not isinstance(payload, dict):
        raise UpstreamUnavailable("Routing response is not a JSON object")
    features = payload.get("features")
    if not isinstance(features, list) or not features:
        raise UpstreamUnavailable("No features found in response")

    feature = features[0] or {}
    geometry_node = feature.get("geometry") or {}
    geometry: list[tuple[float, float]] = []
    for coordinate in geometry_node.get("coordinates") or []:
        if isinstance(coordinate, (list, tuple)) and len(coordinate) >= 2:
            lon, lat = _as_float(coordinate[0]), _as_float(coordinate[1])
            if lon is not None and lat is not None:
                geometry.append((lon, lat))
    if not geometry:
        raise UpstreamUnavailable("Routing response contains no usable geometry")

    properties = feature.get("properties") or {}
    summary = properties.get("summary") or {}
    segments = tuple(
        Segment(distance=_as_float(node.get("distance")), duration=_as_float(node.get("duration")))
        for node in properties.get("segments") or []
        if isinstance(node, dict)
    )

    return ProviderRoute(
        geometry=tuple(geometry),
        distance=_as_float(summary.get("distance")),
        duration=_as_float(summary.get("duration")),
        segments=segments,
    )


def assemble_route(
    provider_route: ProviderRoute,
    waypoints: Sequence[Waypoint],
    departure: Optional[datetime] = None,
    now: Optional[Clock] = None,
) -> RouteData:
    """Build the response record; times are omitted when there is no departure or scheduling fails."""
    if not provider_route.geometry:
        raise UpstreamUnavailable("Routing response contains no usable geometry")

    itinerary = untimed_itinerary(waypoints)
    if departure is not None:
        result = build_schedule(waypoints, departure, provider_route.segments, now=now)
        if isinstance(result, ScheduleError):
            logger.warning(f"Falling back to untimed itinerary: {result.reason}")
        else:
            itinerary = result.itinerary

    return RouteData(
        geometry=provider_route.geometry,
        distance=provider_route.distance,
        duration=provider_route.duration,
        segments=provider_route.segments,
        waypoints=itinerary,
    )


def create_error_route(message: str) -> RouteData:
    """Canonical failure result: empty geometry with zero distance and duration."""
    return RouteData(geometry=(), distance=0.0, duration=0.0, error=message)
