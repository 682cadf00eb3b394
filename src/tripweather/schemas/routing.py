"""Route calculation request/response schemas."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class WaypointRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    name: str = ""
    timezone_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("timezoneName", "timezone_name", "timezone"),
        serialization_alias="timezoneName",
    )
    duration_minutes: int = Field(
        default=0,
        validation_alias=AliasChoices("durationMinutes", "duration_minutes", "duration"),
        serialization_alias="durationMinutes",
        description="Minutes spent at this waypoint before leaving.",
    )
    date: Optional[str] = Field(default=None, description="Departure date; only read from the first waypoint.")
    time: Optional[str] = Field(default=None, description="Departure time; only read from the first waypoint.")

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("duration_minutes", mode="before")
    @classmethod
    def _coerce_duration(cls, value: Any) -> int:
        if value is None or value == "":
            return 0
        try:
            return int(str(value).strip())
        except ValueError:
            return 0


class DepartureRequest(BaseModel):
    date: str = Field(..., description="Local date, yyyy-MM-dd.")
    time: str = Field(..., description="Local time, HH:mm.")
    zone: Optional[str] = Field(default=None, description="IANA zone; defaults to the first waypoint's zone.")


class RouteCalculationRequest(BaseModel):
    waypoints: List[WaypointRequest] = Field(default_factory=list)
    departure: Optional[DepartureRequest] = None

    @model_validator(mode="before")
    @classmethod
    def _accept_waypoint_list(cls, value: Any) -> Any:
        """A bare JSON array is a list of waypoints without a separate departure."""
        if isinstance(value, list):
            return {"waypoints": value}
        return value


class SegmentModel(BaseModel):
    distance: Optional[float] = None
    duration: Optional[float] = None


class RouteWaypointModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    location: List[float]
    name: str
    timezone: Optional[str] = None
    arrival_time: Optional[str] = Field(default=None, serialization_alias="arrivalTime")
    departure_time: Optional[str] = Field(default=None, serialization_alias="departureTime")
    duration: int = 0


class RouteResponse(BaseModel):
    geometry: List[List[float]] = Field(default_factory=list)
    distance: Optional[float] = 0.0
    duration: Optional[float] = 0.0
    segments: List[SegmentModel] = Field(default_factory=list)
    waypoints: List[RouteWaypointModel] = Field(default_factory=list)
    error: Optional[str] = None
