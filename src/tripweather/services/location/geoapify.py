"""Reverse geocoding and place search backed by Geoapify."""

from __future__ import annotations

import logging
from typing import Any

from ...config import settings
from ...models.domain import LocationData, TimezoneInfo
from ..http_client import ProviderClient
from ..scheduling.errors import ConfigurationMissing

logger = logging.getLogger(__name__)


def _first_properties(payload: Any) -> dict:
    if not isinstance(payload, dict):
        return {}
    features = payload.get("features") or []
    if not features or not isinstance(features[0], dict):
        return {}
    return features[0].get("properties") or {}


def parse_location(payload: Any) -> LocationData:
    properties = _first_properties(payload)
    timezone_node = properties.get("timezone")
    timezone = None
    if isinstance(timezone_node, dict):
        timezone = TimezoneInfo(
            name=timezone_node.get("name"),
            offset_std=timezone_node.get("offset_STD"),
            offset_dst=timezone_node.get("offset_DST"),
            abbreviation_std=timezone_node.get("abbreviation_STD"),
            abbreviation_dst=timezone_node.get("abbreviation_DST"),
        )
    return LocationData(
        formatted=properties.get("formatted"),
        timezone=timezone,
        raw=payload if isinstance(payload, dict) else {},
    )


class GeoapifyClient(ProviderClient):
    provider_name = "Geoapify"

    def __init__(self, api_key: str | None = None, base_url: str | None = None, **kwargs) -> None:
        self.api_key = api_key if api_key is not None else settings.geoapify_api_key
        if not self.api_key:
            raise ConfigurationMissing("Geoapify API key not configured")
        super().__init__(base_url or settings.geoapify_base_url, **kwargs)

    def reverse_raw(self, latitude: float, longitude: float) -> dict:
        params = {"lat": f"{latitude:.6f}", "lon": f"{longitude:.6f}", "apiKey": self.api_key}
        return self.get_json("/v1/geocode/reverse", params=params)

    def reverse(self, latitude: float, longitude: float) -> LocationData:
        return parse_location(self.reverse_raw(latitude, longitude))

    def search(self, text: str) -> dict:
        if not text or not text.strip():
            raise ValueError("Search text must not be empty.")
        return self.get_json("/v1/geocode/search", params={"text": text.strip(), "apiKey": self.api_key})

    def timezone_name(self, latitude: float, longitude: float) -> str | None:
        location = self.reverse(latitude, longitude)
        if location.timezone and location.timezone.name:
            return location.timezone.name
        logger.info(f"No timezone in reverse geocoding result for {latitude}, {longitude}")
        return None


def lookup_timezone_name(latitude: float, longitude: float) -> str | None:
    """Resolver for ``TimezoneLookup``; raises ``ConfigurationMissing`` without an API key."""
    return GeoapifyClient().timezone_name(latitude, longitude)
