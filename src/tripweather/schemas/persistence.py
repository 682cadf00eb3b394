"""Saved route schemas (camelCase on the wire)."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class WaypointDto(_CamelModel):
    id: Optional[UUID] = None
    sequence: Optional[int] = None
    date: Optional[str] = None
    time: Optional[str] = None
    timezone: Optional[str] = None
    duration_min: int = 0
    location_name: Optional[str] = None
    latitude: float
    longitude: float
    elevation: Optional[float] = None
    route_id: Optional[UUID] = None


class RouteDto(_CamelModel):
    id: Optional[UUID] = None
    name: str = Field(..., min_length=1, max_length=255)
    created: Optional[datetime] = None
    user_id: Optional[UUID] = None
    waypoints: List[WaypointDto] = Field(default_factory=list)


class RouteSearchResultDto(_CamelModel):
    id: UUID
    name: str
    created: Optional[datetime] = None
    user_id: Optional[UUID] = None


class UserDto(_CamelModel):
    id: UUID
    name: str
    created: Optional[datetime] = None
