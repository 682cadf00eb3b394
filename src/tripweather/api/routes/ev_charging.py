"""EV charging station endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.ev import EVChargingStationRequest
from ...services.ev.client import EVChargingClient
from ...services.scheduling.errors import ConfigurationMissing

router = APIRouter(prefix="/ev-charging", tags=["ev-charging"])

logger = logging.getLogger(__name__)


@router.post("/stations", status_code=status.HTTP_200_OK)
def stations(payload: EVChargingStationRequest) -> dict:
    logger.info(f"Received request for EV charging stations along route with {len(payload.route)} points")
    try:
        client = EVChargingClient()
        return client.stations_along_route(payload.route, payload.parameters)
    except ConfigurationMissing as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except ValueError as exc:
        logger.error(f"Invalid request for EV charging stations: {exc}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/health", status_code=status.HTTP_200_OK)
def ev_health() -> dict:
    return {"service": "ev-charging", "status": "ok"}
