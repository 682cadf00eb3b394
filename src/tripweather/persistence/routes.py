"""Saved route persistence (routes and their waypoints) in Supabase."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from ..schemas.persistence import RouteDto, RouteSearchResultDto, WaypointDto
from .users import get_or_create_guest_user, get_user_by_id_or_guest, require_client

logger = logging.getLogger(__name__)


def _waypoint_record(waypoint: WaypointDto, route_id: str, sequence: int) -> dict[str, Any]:
    return {
        "id": str(waypoint.id or uuid.uuid4()),
        "route_id": route_id,
        "sequence": sequence,
        "date": waypoint.date,
        "time": waypoint.time,
        "timezone": waypoint.timezone,
        "duration_min": waypoint.duration_min if waypoint.duration_min is not None else 0,
        "location_name": waypoint.location_name,
        "latitude": waypoint.latitude,
        "longitude": waypoint.longitude,
        "elevation": waypoint.elevation,
    }


def _waypoint_from_record(record: dict[str, Any]) -> WaypointDto:
    return WaypointDto(
        id=record.get("id"),
        sequence=record.get("sequence"),
        date=record.get("date"),
        time=record.get("time"),
        timezone=record.get("timezone"),
        duration_min=record.get("duration_min") or 0,
        location_name=record.get("location_name"),
        latitude=record["latitude"],
        longitude=record["longitude"],
        elevation=record.get("elevation"),
        route_id=record.get("route_id"),
    )


def _route_from_records(route: dict[str, Any], waypoints: list[dict[str, Any]]) -> RouteDto:
    ordered = sorted(waypoints, key=lambda record: record.get("sequence") or 0)
    return RouteDto(
        id=route["id"],
        name=route["name"],
        created=route.get("created"),
        user_id=route.get("user_id"),
        waypoints=[_waypoint_from_record(record) for record in ordered],
    )


def _find_route_record(route_id: UUID | str) -> Optional[dict[str, Any]]:
    supabase = require_client()
    response = supabase.table("routes").select("*").eq("id", str(route_id)).limit(1).execute()
    rows = response.data or []
    return rows[0] if rows else None


def save_route(route: RouteDto) -> RouteDto:
    """Create or update a route and replace its waypoints.

    An id that does not exist creates a new route with that id. A route owned
    by a different user is reassigned to the guest user. Waypoints are
    resequenced from 1 in the order supplied.
    """
    logger.info(f"Saving route '{route.name}' (id={route.id}, user={route.user_id})")
    supabase = require_client()
    user = get_user_by_id_or_guest(route.user_id)

    is_new = route.id is None
    route_id = str(route.id or uuid.uuid4())
    created = datetime.now(timezone.utc).isoformat()

    if not is_new:
        existing = _find_route_record(route_id)
        if existing:
            created = existing.get("created") or created
            if str(existing.get("user_id")) != str(user["id"]):
                logger.warning(
                    f"Route ID {route_id} belongs to user {existing.get('user_id')}, "
                    f"but requested by user {user['id']}. Using guest user."
                )
                user = get_or_create_guest_user()
        else:
            logger.warning(f"Route with ID {route_id} not found, creating new route instead")
            if route.created is not None:
                created = route.created.isoformat()

    route_record = {
        "id": route_id,
        "name": route.name,
        "created": created,
        "user_id": str(user["id"]),
    }
    supabase.table("routes").upsert(route_record).execute()

    if not is_new:
        supabase.table("waypoints").delete().eq("route_id", route_id).execute()

    waypoint_records = [
        _waypoint_record(waypoint, route_id, sequence)
        for sequence, waypoint in enumerate(route.waypoints, start=1)
    ]
    if waypoint_records:
        supabase.table("waypoints").insert(waypoint_records).execute()

    logger.info(f"Route saved with ID: {route_id} ({len(waypoint_records)} waypoints, new={is_new})")
    return _route_from_records(route_record, waypoint_records)


def load_route(route_id: UUID) -> Optional[RouteDto]:
    route = _find_route_record(route_id)
    if not route:
        logger.info(f"Route not found with ID: {route_id}")
        return None

    response = (
        require_client()
        .table("waypoints")
        .select("*")
        .eq("route_id", str(route_id))
        .order("sequence")
        .execute()
    )
    waypoints = response.data or []
    logger.info(f"Loaded route '{route['name']}' with {len(waypoints)} waypoints")
    return _route_from_records(route, waypoints)


def search_routes(user_id: UUID, text: Optional[str] = None) -> list[RouteSearchResultDto]:
    """Routes of a user, optionally filtered by a case-insensitive name fragment."""
    query = require_client().table("routes").select("id, name, created, user_id").eq("user_id", str(user_id))
    if text and text.strip():
        query = query.ilike("name", f"%{text.strip()}%")
    response = query.order("created", desc=True).execute()
    return [
        RouteSearchResultDto(id=row["id"], name=row["name"], created=row.get("created"), user_id=row.get("user_id"))
        for row in response.data or []
    ]
