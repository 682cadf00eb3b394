"""NREL alternative fuel station search along a route."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from shapely.geometry import LineString

from ...config import settings
from ..http_client import ProviderClient
from ..scheduling.errors import ConfigurationMissing

logger = logging.getLogger(__name__)

NEARBY_ROUTE_PATH = "/api/alt-fuel-stations/v1/nearby-route.geojson"


def route_to_wkt(route: Sequence[Sequence[float]]) -> str:
    """Convert ``[lon, lat]`` pairs to a WKT ``LINESTRING``."""
    if not route:
        raise ValueError("Route cannot be null or empty")
    points: list[tuple[float, float]] = []
    for index, point in enumerate(route):
        if point is None or len(point) < 2:
            raise ValueError(f"Invalid route point at index {index}")
        points.append((float(point[0]), float(point[1])))
    if len(points) < 2:
        raise ValueError("Route must contain at least 2 points")
    return LineString(points).wkt


def empty_feature_collection() -> dict:
    return {"type": "FeatureCollection", "features": []}


class EVChargingClient(ProviderClient):
    provider_name = "NREL"

    def __init__(self, api_key: str | None = None, base_url: str | None = None, **kwargs) -> None:
        self.api_key = api_key if api_key is not None else settings.nrel_api_key
        if not self.api_key:
            raise ConfigurationMissing("NREL API key not configured")
        super().__init__(base_url or settings.nrel_base_url, headers={"Accept": "application/json"}, **kwargs)

    def stations_along_route(
        self,
        route: Sequence[Sequence[float]],
        parameters: Mapping[str, Any] | None = None,
    ) -> dict:
        """Stations near the route as a GeoJSON FeatureCollection.

        Invalid routes raise ``ValueError``; provider failures return an empty collection.
        """
        body: dict[str, Any] = {"route": route_to_wkt(route)}
        for key, value in (parameters or {}).items():
            if value is not None:
                body[key] = value

        logger.info(f"Requesting EV charging stations along route with {len(route)} points")
        try:
            response = self.post_json(NEARBY_ROUTE_PATH, params={"api_key": self.api_key}, json=body)
        except (ConnectionError, ValueError) as exc:
            logger.error(f"Error calling NREL EV charging stations API: {exc}")
            return empty_feature_collection()

        if not isinstance(response, dict):
            return empty_feature_collection()
        response.setdefault("type", "FeatureCollection")
        response.setdefault("features", [])
        logger.info(f"Retrieved {len(response['features'])} EV charging stations")
        return response
