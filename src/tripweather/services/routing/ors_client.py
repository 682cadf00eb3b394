"""HTTP client for the OpenRouteService directions API."""

from __future__ import annotations

import logging
from typing import Sequence

import httpx

from ...config import settings
from ..http_client import ProviderClient
from ..scheduling.errors import ConfigurationMissing

logger = logging.getLogger(__name__)


class OpenRouteServiceClient(ProviderClient):
    provider_name = "OpenRouteService"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        profile: str | None = None,
        **kwargs,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.openrouteservice_api_key
        if not self.api_key:
            raise ConfigurationMissing("OpenRouteService API key not configured")
        self.profile = profile or settings.openrouteservice_profile
        super().__init__(
            base_url or settings.openrouteservice_base_url,
            headers={"Authorization": self.api_key, "Accept": "application/geo+json, application/json"},
            **kwargs,
        )

    def directions(self, coordinates: Sequence[tuple[float, float]]) -> dict:
        """Request a GeoJSON route through ``coordinates`` given as (lat, lon) pairs.

        The response carries one feature whose geometry is the full polyline
        and whose properties hold the summary and one segment per leg.
        """
        if len(coordinates) < 2:
            raise ValueError("At least two coordinates are required for routing.")

        body = {"coordinates": [[lon, lat] for lat, lon in coordinates]}
        logger.info(f"Requesting {self.profile} directions for {len(coordinates)} waypoints")
        return self.post_json(f"/v2/directions/{self.profile}/geojson", json=body)


def check_health(base_url: str | None = None) -> bool:
    """Check that the routing provider answers its status endpoint."""
    base = base_url or settings.openrouteservice_base_url
    if not base or not settings.openrouteservice_api_key:
        return False
    try:
        response = httpx.get(
            f"{base.rstrip('/')}/v2/health",
            headers={"Authorization": settings.openrouteservice_api_key},
            timeout=5.0,
        )
        response.raise_for_status()
        return response.json().get("status") == "ready"
    except httpx.HTTPError:
        return False
    except ValueError:
        return False
