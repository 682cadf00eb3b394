"""Weather forecast schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class WeatherResponse(BaseModel):
    condition: Optional[str] = None
    temperature: Optional[int] = None
    temperature_unit: Optional[str] = Field(default=None, serialization_alias="temperatureUnit")
    wind_speed: Optional[str] = Field(default=None, serialization_alias="windSpeed")
    wind_direction: Optional[str] = Field(default=None, serialization_alias="windDirection")
    error: Optional[str] = None
