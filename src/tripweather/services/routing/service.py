"""Route calculation orchestration."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ...models.domain import RouteData, Waypoint
from ...schemas.routing import (
    RouteCalculationRequest,
    RouteResponse,
    RouteWaypointModel,
    SegmentModel,
)
from ..location.geoapify import lookup_timezone_name
from ..location.timezones import TimezoneLookup, resolve_waypoints
from ..scheduling.assembler import assemble_route, create_error_route, parse_directions
from ..scheduling.builder import Clock
from ..scheduling.clock import to_zoned
from ..scheduling.errors import (
    ConfigurationMissing,
    InsufficientInput,
    TemporalParseFailure,
    UpstreamUnavailable,
)
from .ors_client import OpenRouteServiceClient

logger = logging.getLogger(__name__)


# Route calculation falls back to UTC rather than guessing from longitude.
route_timezones = TimezoneLookup(resolver=lookup_timezone_name, fallback="UTC", approximate=False)


def _to_waypoints(payload: RouteCalculationRequest) -> list[Waypoint]:
    return [
        Waypoint(
            latitude=item.latitude,
            longitude=item.longitude,
            name=item.name,
            timezone=(item.timezone_name or "").strip() or None,
            dwell_minutes=item.duration_minutes,
        )
        for item in payload.waypoints
    ]


def _resolve_departure(payload: RouteCalculationRequest, waypoints: Sequence[Waypoint]) -> Optional[datetime]:
    """Departure from the request, or from date/time on the first waypoint; ``None`` when absent."""
    first_zone = waypoints[0].timezone
    if payload.departure is not None:
        departure = payload.departure
        return to_zoned(departure.date, departure.time, (departure.zone or "").strip() or first_zone)

    first = payload.waypoints[0]
    if first.date and first.date.strip() and first.time and first.time.strip():
        return to_zoned(first.date, first.time, first_zone)
    return None


def calculate_route(payload: RouteCalculationRequest, now: Optional[Clock] = None) -> RouteData:
    """Route through the requested waypoints with an arrival/departure schedule.

    Never raises: failures yield the zero-distance error route, and a departure
    that cannot be interpreted yields an itinerary without times.
    """
    try:
        if len(payload.waypoints) < 2:
            raise InsufficientInput("At least 2 waypoints are required for routing")

        client = OpenRouteServiceClient()
        waypoints = resolve_waypoints(_to_waypoints(payload), route_timezones)

        try:
            departure = _resolve_departure(payload, waypoints)
        except TemporalParseFailure as exc:
            logger.warning(f"Ignoring departure that cannot be parsed: {exc}")
            departure = None

        response = client.directions([(waypoint.latitude, waypoint.longitude) for waypoint in waypoints])
        provider_route = parse_directions(response)
        route = assemble_route(provider_route, waypoints, departure, now=now)
        logger.info(
            f"Calculated route with {len(route.waypoints)} waypoints, "
            f"{len(route.geometry)} points, timed={departure is not None}"
        )
        return route
    except (InsufficientInput, ConfigurationMissing, UpstreamUnavailable) as exc:
        logger.warning(f"Route calculation failed: {exc}")
        return create_error_route(str(exc))
    except (ConnectionError, ValueError) as exc:
        logger.error(f"Routing provider call failed: {exc}")
        return create_error_route(f"Failed to calculate route: {exc}")
    except Exception as exc:
        logger.exception(f"Unexpected error calculating route: {exc}")
        return create_error_route(f"Failed to calculate route: {exc}")


def route_data_to_response(route: RouteData) -> RouteResponse:
    return RouteResponse(
        geometry=[list(point) for point in route.geometry],
        distance=route.distance,
        duration=route.duration,
        segments=[SegmentModel(distance=segment.distance, duration=segment.duration) for segment in route.segments],
        waypoints=[
            RouteWaypointModel(
                location=list(waypoint.location),
                name=waypoint.name,
                timezone=waypoint.timezone,
                arrival_time=waypoint.arrival_time,
                departure_time=waypoint.departure_time,
                duration=waypoint.duration,
            )
            for waypoint in route.waypoints
        ],
        error=route.error,
    )
