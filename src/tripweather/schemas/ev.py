"""EV charging station request schema."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class EVChargingStationRequest(BaseModel):
    route: List[List[float]] = Field(default_factory=list, description="Route as [longitude, latitude] pairs.")
    parameters: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Extra NREL query parameters (fuel_type, distance, ev_network, ...).",
    )
