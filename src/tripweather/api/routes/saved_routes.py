"""Saved route endpoints."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from ...persistence.routes import load_route, save_route, search_routes
from ...schemas.persistence import RouteDto, RouteSearchResultDto
from ...services.scheduling.errors import ConfigurationMissing

router = APIRouter(prefix="/routes", tags=["routes"])

logger = logging.getLogger(__name__)


@router.post("", response_model=RouteDto, status_code=status.HTTP_200_OK)
def save(payload: RouteDto) -> RouteDto:
    logger.info(f"Received request to save route '{payload.name}' with {len(payload.waypoints)} waypoints")
    try:
        return save_route(payload)
    except ConfigurationMissing as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error saving route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save route: {str(exc)}",
        ) from exc


@router.get("", response_model=list[RouteSearchResultDto], status_code=status.HTTP_200_OK)
def search(
    user_id: UUID = Query(..., alias="userId", description="Owner of the routes"),
    q: str | None = Query(default=None, description="Case-insensitive name fragment"),
) -> list[RouteSearchResultDto]:
    try:
        return search_routes(user_id, q)
    except ConfigurationMissing as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error searching routes: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to search routes: {str(exc)}",
        ) from exc


@router.get("/{route_id}", response_model=RouteDto, status_code=status.HTTP_200_OK)
def load(route_id: UUID) -> RouteDto:
    try:
        route = load_route(route_id)
    except ConfigurationMissing as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error loading route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to load route: {str(exc)}",
        ) from exc
    if route is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Route {route_id} not found")
    return route
