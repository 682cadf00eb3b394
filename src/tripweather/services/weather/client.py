"""National Weather Service forecast lookup for a place and local time."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from ...config import settings
from ...models.domain import WeatherData
from ..http_client import ProviderClient

logger = logging.getLogger(__name__)


def _parse_target(date: str, time: str) -> datetime:
    return datetime.fromisoformat(f"{date.strip()}T{time.strip()}")


def find_matching_period(periods: Any, target: datetime) -> Optional[dict]:
    """Return the forecast period containing ``target`` (local wall clock), else the first well-formed one."""
    if not isinstance(periods, list):
        return None

    for period in periods:
        if not isinstance(period, dict) or "startTime" not in period or "endTime" not in period:
            continue
        try:
            start = datetime.fromisoformat(period["startTime"])
            end = datetime.fromisoformat(period["endTime"])
        except (TypeError, ValueError):
            continue
        # the target is a wall-clock time at the forecast location, which shares the period's offset
        target_zoned = target.replace(tzinfo=start.tzinfo)
        if start <= target_zoned < end:
            return period

    return next((period for period in periods if isinstance(period, dict)), None)


def extract_weather(period: dict) -> WeatherData:
    temperature = period.get("temperature")
    return WeatherData(
        condition=period.get("shortForecast") or "Unknown",
        temperature=int(temperature) if isinstance(temperature, (int, float)) else None,
        temperature_unit=period.get("temperatureUnit") or "F",
        wind_speed=period.get("windSpeed") or "Unknown",
        wind_direction=period.get("windDirection") or "Unknown",
    )


class WeatherClient(ProviderClient):
    provider_name = "National Weather Service"

    def __init__(self, base_url: str | None = None, user_agent: str | None = None, **kwargs) -> None:
        super().__init__(
            base_url or settings.weather_base_url,
            headers={"User-Agent": user_agent or settings.weather_user_agent, "Accept": "application/geo+json"},
            **kwargs,
        )

    def forecast_url(self, latitude: float, longitude: float) -> Optional[str]:
        data = self.get_json(f"/points/{latitude:.4f},{longitude:.4f}")
        properties = data.get("properties") if isinstance(data, dict) else None
        if isinstance(properties, dict) and properties.get("forecast"):
            return properties["forecast"]
        return None

    def forecast(self, latitude: float, longitude: float, date: str, time: str) -> WeatherData:
        """Forecast for the period covering ``date``/``time``; failures become ``WeatherData.error``."""
        try:
            target = _parse_target(date, time)
        except (AttributeError, ValueError) as exc:
            return WeatherData.create_error(f"Invalid date/time: {exc}")

        try:
            url = self.forecast_url(latitude, longitude)
            if url is None:
                return WeatherData.create_error("Unable to get forecast URL for location")

            data = self.get_json(url)
            properties = data.get("properties") if isinstance(data, dict) else None
            if not isinstance(properties, dict):
                return WeatherData.create_error("Invalid forecast data")

            period = find_matching_period(properties.get("periods"), target)
            if period is None:
                return WeatherData.create_error("No forecast available for selected date/time")
            return extract_weather(period)
        except (ConnectionError, ValueError) as exc:
            logger.warning(f"Weather lookup failed for {latitude}, {longitude}: {exc}")
            return WeatherData.create_error(f"Error fetching weather: {exc}")
