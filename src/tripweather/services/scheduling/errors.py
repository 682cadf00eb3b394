"""Failure taxonomy for route calculation and itinerary scheduling."""

from __future__ import annotations


class RouteCalculationError(Exception):
    """Base class for failures that end in the zero-distance error result."""


class InsufficientInput(RouteCalculationError):
    """Fewer than two waypoints were supplied."""


class UpstreamUnavailable(RouteCalculationError):
    """A provider call failed or returned no usable data."""


class ConfigurationMissing(RouteCalculationError):
    """Required provider credentials are not configured."""


class TemporalParseFailure(ValueError):
    """A date/time string or zone identifier could not be interpreted."""


class InvalidFormat(TemporalParseFailure):
    """A date/time string does not match the fixed minute pattern."""


class UnknownTimezone(TemporalParseFailure):
    """A zone identifier is not in the tz database."""
