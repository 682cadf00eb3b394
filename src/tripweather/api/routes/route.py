"""Route calculation endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from ...schemas.routing import RouteCalculationRequest, RouteResponse
from ...services.routing.service import calculate_route, route_data_to_response

router = APIRouter(prefix="/route", tags=["route"])

logger = logging.getLogger(__name__)


@router.post(
    "/calculate",
    response_model=RouteResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    responses={status.HTTP_400_BAD_REQUEST: {"model": RouteResponse}},
)
def calculate(payload: RouteCalculationRequest):
    """Calculate a route; an empty geometry in the body means the calculation failed."""
    route = calculate_route(payload)
    response = route_data_to_response(route)
    if not route.succeeded:
        logger.info(f"Route calculation returned no geometry: {route.error}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=response.model_dump(by_alias=True, exclude_none=True),
        )
    return response


@router.get("/health", status_code=status.HTTP_200_OK)
def route_health() -> dict:
    return {"service": "route", "status": "ok"}
