"""Itinerary scheduling helpers."""

from .assembler import assemble_route, create_error_route, parse_directions
from .builder import ScheduleError, ScheduleOk, build_schedule, untimed_itinerary

__all__ = [
    "assemble_route",
    "build_schedule",
    "create_error_route",
    "parse_directions",
    "untimed_itinerary",
    "ScheduleOk",
    "ScheduleError",
]
