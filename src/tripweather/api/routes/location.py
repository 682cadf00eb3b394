"""Reverse geocoding and place search endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status

from ...schemas.location import LocationSummary
from ...services.location.geoapify import GeoapifyClient
from ...services.scheduling.errors import ConfigurationMissing

router = APIRouter(prefix="/location", tags=["location"])

logger = logging.getLogger(__name__)


def _client() -> GeoapifyClient:
    try:
        return GeoapifyClient()
    except ConfigurationMissing as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc


@router.get("/reverse", response_model=LocationSummary, status_code=status.HTTP_200_OK)
def reverse(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
) -> LocationSummary:
    """Place name and standard/daylight zone details for a coordinate."""
    client = _client()
    try:
        location = client.reverse(latitude, longitude)
    except (ConnectionError, ValueError) as exc:
        logger.warning(f"Reverse geocoding failed at LAT {latitude}, LON {longitude}: {exc}")
        return LocationSummary()

    if not location.formatted and location.timezone is None:
        logger.warning(f"No locations found at LAT {latitude}, LON {longitude}")
        return LocationSummary()

    timezone = location.timezone
    return LocationSummary(
        location_name=location.formatted or "Unknown",
        zone_standard=(timezone.abbreviation_std if timezone else None) or "UNK",
        offset_standard=(timezone.offset_std if timezone else None) or "-00:00",
        zone_daylight=(timezone.abbreviation_dst if timezone else None) or "UNK",
        offset_daylight=(timezone.offset_dst if timezone else None) or "-00:00",
        timezone=timezone.name if timezone else None,
    )


@router.get("/geocode/reverse", status_code=status.HTTP_200_OK)
def reverse_complete(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
) -> dict:
    """Raw reverse geocoding payload."""
    client = _client()
    try:
        return client.reverse_raw(lat, lon)
    except (ConnectionError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc


@router.get("/search", status_code=status.HTTP_200_OK)
def search(query: str = Query(..., min_length=1)) -> dict:
    client = _client()
    try:
        return client.search(query)
    except ConnectionError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
