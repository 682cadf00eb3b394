"""Time-zone lookup endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from ...schemas.location import TimezoneResponse
from ...services.location.geoapify import lookup_timezone_name
from ...services.location.timezones import TimezoneLookup
from ...services.scheduling.clock import current_time, timezone_abbreviation

router = APIRouter(prefix="/timezone", tags=["timezone"])

timezone_lookup = TimezoneLookup(resolver=lookup_timezone_name)


@router.get("", response_model=TimezoneResponse, status_code=status.HTTP_200_OK)
def get_timezone(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    date_time: str | None = Query(default=None, alias="dateTime", description="yyyy-MM-dd HH:mm, local to the point"),
) -> TimezoneResponse:
    zone = timezone_lookup.lookup(latitude, longitude)
    return TimezoneResponse(
        timezone=zone,
        abbreviation=timezone_abbreviation(zone, date_time),
        current_time=current_time(zone),
    )
