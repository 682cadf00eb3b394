"""Zone-aware date/time helpers for the fixed ``yyyy-MM-dd HH:mm`` wall-clock format.

Values travel through the scheduler as timezone-aware ``datetime`` objects
carrying a ``ZoneInfo``; strings only appear at the API boundary. Arithmetic
is done on the absolute timeline so that adding minutes across a DST change
moves the instant, not the wall clock.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ...config import settings
from .errors import InvalidFormat, TemporalParseFailure, UnknownTimezone

DATE_TIME_FORMAT = "%Y-%m-%d %H:%M"
_DATE_TIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}$")

logger = logging.getLogger(__name__)


def get_zone(name: Optional[str]) -> ZoneInfo:
    """Return the ``ZoneInfo`` for an IANA identifier or raise ``UnknownTimezone``."""
    if not name:
        raise UnknownTimezone("Time zone identifier is empty.")
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, TypeError) as exc:
        raise UnknownTimezone(f"Unknown time zone '{name}'") from exc


def parse_local(date_time: str, zone: str) -> datetime:
    """Interpret a wall-clock string in ``zone``.

    Wall times inside a DST gap are pushed forward by the gap length; wall
    times inside an overlap take the earlier offset.
    """
    tz = get_zone(zone)
    if not isinstance(date_time, str) or not _DATE_TIME_PATTERN.match(date_time.strip()):
        raise InvalidFormat(f"'{date_time}' does not match {DATE_TIME_FORMAT}")
    try:
        naive = datetime.strptime(date_time.strip(), DATE_TIME_FORMAT)
    except ValueError as exc:
        raise InvalidFormat(f"'{date_time}' is not a valid date/time: {exc}") from exc
    return naive.replace(tzinfo=tz).astimezone(timezone.utc).astimezone(tz)


def to_zoned(date: str, time: str, zone: str) -> datetime:
    """Combine separate date and time strings into a zoned value."""
    return parse_local(f"{(date or '').strip()} {(time or '').strip()}", zone)


def format_local(value: datetime) -> str:
    return value.strftime(DATE_TIME_FORMAT)


def shift_zone(value: datetime, zone: str) -> datetime:
    """Same instant, expressed in another zone."""
    return value.astimezone(get_zone(zone))


def add_minutes(value: datetime, minutes: int) -> datetime:
    """Advance an aware value by whole minutes on the absolute timeline."""
    if value.tzinfo is None:
        raise UnknownTimezone("Cannot add minutes to a naive date/time.")
    shifted = value.astimezone(timezone.utc) + timedelta(minutes=minutes)
    return shifted.astimezone(value.tzinfo)


def now_in_zone(zone: str) -> datetime:
    """Current instant in ``zone`` truncated to the minute."""
    return datetime.now(get_zone(zone)).replace(second=0, microsecond=0)


def convert_datetime(date_time: str, from_zone: str, to_zone: str) -> str:
    """Render the instant ``date_time`` (wall clock in ``from_zone``) in ``to_zone``.

    Returns the input unchanged if it cannot be parsed or either zone is unknown.
    """
    try:
        return format_local(shift_zone(parse_local(date_time, from_zone), to_zone))
    except (TemporalParseFailure, OverflowError) as exc:
        logger.warning(f"Error converting datetime from {from_zone} to {to_zone}: {exc}")
        return date_time


def add_minutes_to_datetime(date_time: str, zone: str, minutes: int) -> str:
    """Add ``minutes`` to a wall-clock string in ``zone``; input returned unchanged on failure."""
    try:
        return format_local(add_minutes(parse_local(date_time, zone), int(minutes or 0)))
    except (TemporalParseFailure, OverflowError) as exc:
        logger.warning(f"Error adding minutes to datetime {date_time}: {exc}")
        return date_time


def current_time(zone: str) -> str:
    """Current wall-clock time in ``zone``, or in the configured default zone if it is unknown."""
    try:
        return format_local(now_in_zone(zone))
    except TemporalParseFailure as exc:
        logger.warning(f"Error getting current time for timezone {zone}: {exc}")
        return format_local(now_in_zone(settings.default_timezone_name))


def is_valid_timezone(zone: Optional[str]) -> bool:
    try:
        get_zone(zone)
    except UnknownTimezone:
        return False
    return True


def _derived_abbreviation(zone_id: str) -> str:
    if "/" in zone_id:
        city = zone_id.split("/")[-1].replace("_", " ")
        return city[:3].upper()
    return zone_id[:3].upper()


def timezone_abbreviation(zone_id: str, date_time: Optional[str] = None) -> str:
    """DST-aware abbreviation (``MST``/``MDT``) for a zone at ``date_time`` or now."""
    zone_id = zone_id or ""
    try:
        value = parse_local(date_time, zone_id) if date_time else datetime.now(get_zone(zone_id))
    except TemporalParseFailure as exc:
        logger.warning(f"Error getting timezone abbreviation for {zone_id}: {exc}")
        parts = zone_id.split("/")
        return parts[1].replace("_", " ") if len(parts) > 1 else zone_id

    abbreviation = value.tzname()
    # zones without a conventional abbreviation report a numeric offset such as "+03"
    if abbreviation and abbreviation[0].isalpha():
        return abbreviation
    return _derived_abbreviation(zone_id)
