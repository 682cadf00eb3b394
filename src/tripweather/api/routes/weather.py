"""Weather forecast endpoint."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Query, status

from ...schemas.weather import WeatherResponse
from ...services.weather.client import WeatherClient

router = APIRouter(prefix="/weather", tags=["weather"])


@router.get("/forecast", response_model=WeatherResponse, response_model_exclude_none=True, status_code=status.HTTP_200_OK)
def forecast(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    date: str = Query(..., description="yyyy-MM-dd"),
    time: str = Query(..., description="HH:mm"),
) -> WeatherResponse:
    weather = WeatherClient().forecast(latitude, longitude, date, time)
    return WeatherResponse(**asdict(weather))
