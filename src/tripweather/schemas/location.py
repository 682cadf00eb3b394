"""Location and time-zone lookup schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LocationSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    location_name: str = Field(default="Unknown", serialization_alias="locationName")
    zone_standard: str = Field(default="UNK", serialization_alias="zoneStandard")
    offset_standard: str = Field(default="-00:00", serialization_alias="offsetStandard")
    zone_daylight: str = Field(default="UNK", serialization_alias="zoneDaylight")
    offset_daylight: str = Field(default="-00:00", serialization_alias="offsetDaylight")
    timezone: str | None = None


class TimezoneResponse(BaseModel):
    timezone: str
    abbreviation: str
    current_time: str = Field(serialization_alias="currentTime")
