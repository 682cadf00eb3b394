"""User records in Supabase."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from ..db.supabase import get_supabase_client
from ..services.scheduling.errors import ConfigurationMissing

GUEST_USER_NAME = "guest"

logger = logging.getLogger(__name__)


def require_client() -> Any:
    supabase = get_supabase_client()
    if not supabase:
        raise ConfigurationMissing(
            "Supabase not configured. Set TRIPWEATHER_SUPABASE_URL and TRIPWEATHER_SUPABASE_KEY environment variables."
        )
    return supabase


def find_user_by_name(name: str) -> Optional[dict[str, Any]]:
    supabase = require_client()
    response = supabase.table("users").select("*").eq("name", name).limit(1).execute()
    rows = response.data or []
    return rows[0] if rows else None


def find_user_by_id(user_id: UUID) -> Optional[dict[str, Any]]:
    supabase = require_client()
    response = supabase.table("users").select("*").eq("id", str(user_id)).limit(1).execute()
    rows = response.data or []
    return rows[0] if rows else None


def create_user(name: str) -> dict[str, Any]:
    """Create a user, or return the existing one with the same name."""
    existing = find_user_by_name(name)
    if existing:
        logger.info(f"User with name '{name}' already exists with ID: {existing['id']}")
        return existing

    record = {
        "id": str(uuid.uuid4()),
        "name": name,
        "created": datetime.now(timezone.utc).isoformat(),
    }
    response = require_client().table("users").insert(record).execute()
    saved = (response.data or [record])[0]
    logger.info(f"Created user with ID: {saved['id']} and name: {saved['name']}")
    return saved


def get_or_create_guest_user() -> dict[str, Any]:
    guest = find_user_by_name(GUEST_USER_NAME)
    if guest:
        return guest
    logger.info("Guest user not found, creating new guest user")
    return create_user(GUEST_USER_NAME)


def get_user_by_id_or_guest(user_id: Optional[UUID]) -> dict[str, Any]:
    """Look a user up by id; unknown or missing ids resolve to the guest user."""
    if user_id is None:
        return get_or_create_guest_user()
    user = find_user_by_id(user_id)
    if user:
        return user
    logger.warning(f"User with ID {user_id} not found, returning guest user")
    return get_or_create_guest_user()
