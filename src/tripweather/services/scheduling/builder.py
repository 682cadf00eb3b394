"""Arrival/departure propagation across an ordered list of waypoints."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Sequence, Union

from ...models.domain import ScheduledWaypoint, Segment, Waypoint
from .clock import add_minutes, format_local, get_zone, now_in_zone, shift_zone
from .errors import TemporalParseFailure, UnknownTimezone

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


@dataclass(frozen=True, slots=True)
class ScheduleOk:
    itinerary: tuple[ScheduledWaypoint, ...]


@dataclass(frozen=True, slots=True)
class ScheduleError:
    reason: str


ScheduleResult = Union[ScheduleOk, ScheduleError]


def travel_minutes(segments: Sequence[Segment], index: int) -> int:
    """Whole minutes of travel for segment ``index``; seconds are truncated, missing or non-finite data is 0."""
    if index >= len(segments):
        return 0
    duration = segments[index].duration
    if duration is None or not math.isfinite(duration):
        return 0
    return int(duration // 60) if duration >= 0 else -int(-duration // 60)


def _require_zone(waypoint: Waypoint, index: int) -> str:
    if not waypoint.timezone:
        raise UnknownTimezone(f"Waypoint {index} has no resolved time zone.")
    return waypoint.timezone


def _initial_departure(departure: datetime, zone: str, now: Optional[Clock]) -> datetime:
    if departure.tzinfo is None:
        raise UnknownTimezone("Departure must carry a time zone.")
    start = shift_zone(departure, zone)
    current = now() if now is not None else now_in_zone(zone)
    current = shift_zone(current, zone).replace(second=0, microsecond=0)
    if start < current:
        logger.info(f"Departure {format_local(start)} is in the past for {zone}; using {format_local(current)}")
        return current
    return start


def build_schedule(
    waypoints: Sequence[Waypoint],
    departure: datetime,
    segments: Sequence[Segment] = (),
    now: Optional[Clock] = None,
) -> ScheduleResult:
    """Compute arrival and departure times for every waypoint.

    ``current`` is threaded left to right: it starts at the (clamped) departure
    in the first waypoint's zone, is converted into each waypoint's zone on
    arrival, advanced by the dwell to get the departure, and then by the
    truncated travel time of the outgoing segment.

    Any temporal failure abandons the whole schedule; callers get a
    ``ScheduleError`` rather than a partially timed itinerary.
    """
    if len(waypoints) < 2:
        return ScheduleError("At least 2 waypoints are required for scheduling")

    try:
        zones = [_require_zone(waypoint, index) for index, waypoint in enumerate(waypoints)]
        for zone in zones:
            get_zone(zone)

        current = _initial_departure(departure, zones[0], now)
        scheduled: list[ScheduledWaypoint] = []
        last = len(waypoints) - 1
        for index, waypoint in enumerate(waypoints):
            arrival = current if index == 0 else shift_zone(current, zones[index])
            dwell = waypoint.applied_dwell
            leaving = add_minutes(arrival, dwell)
            if index < last:
                current = add_minutes(leaving, travel_minutes(segments, index))

            scheduled.append(
                ScheduledWaypoint(
                    location=(waypoint.longitude, waypoint.latitude),
                    name=waypoint.name or "",
                    timezone=zones[index],
                    duration=dwell,
                    arrival_time=format_local(arrival),
                    departure_time=format_local(leaving),
                )
            )
    except (TemporalParseFailure, ValueError, OverflowError) as exc:
        logger.warning(f"Error calculating arrival times with durations and timezones: {exc}")
        return ScheduleError(str(exc))

    return ScheduleOk(tuple(scheduled))


def untimed_itinerary(waypoints: Sequence[Waypoint]) -> tuple[ScheduledWaypoint, ...]:
    """Waypoints with location, name and zone only; arrival and departure stay absent."""
    return tuple(
        ScheduledWaypoint(
            location=(waypoint.longitude, waypoint.latitude),
            name=waypoint.name or "",
            timezone=waypoint.timezone,
            duration=waypoint.applied_dwell,
        )
        for waypoint in waypoints
    )
