import uuid

import pytest

from tripweather.persistence import routes as route_store
from tripweather.persistence import users
from tripweather.schemas.persistence import RouteDto
from tripweather.services.scheduling.errors import ConfigurationMissing


def _route(**extra):
    payload = {
        "name": "Front Range",
        "waypoints": [
            {"sequence": 7, "date": "2024-06-01", "time": "08:00", "timezone": "America/Denver",
             "locationName": "Denver", "latitude": 39.74, "longitude": -104.99},
            {"sequence": 3, "durationMin": 30, "locationName": "Boulder", "latitude": 40.01, "longitude": -105.27},
        ],
    }
    payload.update(extra)
    return RouteDto.model_validate(payload)


def test_create_user_is_idempotent_by_name(fake_supabase):
    first = users.create_user("alice")
    second = users.create_user("alice")

    assert first["id"] == second["id"]
    assert len(fake_supabase.store["users"]) == 1


def test_unknown_user_id_resolves_to_guest(fake_supabase):
    user = users.get_user_by_id_or_guest(uuid.uuid4())

    assert user["name"] == users.GUEST_USER_NAME
    assert users.get_or_create_guest_user()["id"] == user["id"]


def test_save_new_route_resequences_waypoints(fake_supabase):
    saved = route_store.save_route(_route())

    assert saved.id is not None
    assert [w.sequence for w in saved.waypoints] == [1, 2]
    assert [w.location_name for w in saved.waypoints] == ["Denver", "Boulder"]
    assert saved.waypoints[1].duration_min == 30
    assert str(saved.user_id) == users.get_or_create_guest_user()["id"]


def test_load_route_round_trip(fake_supabase):
    saved = route_store.save_route(_route())

    loaded = route_store.load_route(saved.id)

    assert loaded.name == "Front Range"
    assert [w.location_name for w in loaded.waypoints] == ["Denver", "Boulder"]
    assert loaded.waypoints[0].timezone == "America/Denver"


def test_update_replaces_waypoints(fake_supabase):
    saved = route_store.save_route(_route())
    updated = route_store.save_route(
        _route(id=str(saved.id), userId=str(saved.user_id), name="Shorter",
               waypoints=[{"latitude": 1.0, "longitude": 2.0}, {"latitude": 3.0, "longitude": 4.0}])
    )

    assert updated.id == saved.id
    assert len(fake_supabase.store["routes"]) == 1
    assert len(fake_supabase.store["waypoints"]) == 2
    assert route_store.load_route(saved.id).name == "Shorter"


def test_unknown_route_id_creates_route_with_that_id(fake_supabase):
    route_id = uuid.uuid4()

    saved = route_store.save_route(_route(id=str(route_id)))

    assert saved.id == route_id
    assert route_store.load_route(route_id) is not None


def test_route_owned_by_someone_else_goes_to_guest(fake_supabase):
    owner = users.create_user("owner")
    other = users.create_user("other")
    saved = route_store.save_route(_route(userId=owner["id"]))

    updated = route_store.save_route(_route(id=str(saved.id), userId=other["id"]))

    assert str(updated.user_id) == users.get_or_create_guest_user()["id"]


def test_search_routes_filters_by_name(fake_supabase):
    owner = users.create_user("owner")
    route_store.save_route(_route(userId=owner["id"], name="Mountain loop"))
    route_store.save_route(_route(userId=owner["id"], name="Coast drive"))

    results = route_store.search_routes(uuid.UUID(owner["id"]), "MOUNTAIN")

    assert [r.name for r in results] == ["Mountain loop"]
    assert len(route_store.search_routes(uuid.UUID(owner["id"]))) == 2


def test_load_missing_route_returns_none(fake_supabase):
    assert route_store.load_route(uuid.uuid4()) is None


def test_persistence_requires_configuration(monkeypatch):
    monkeypatch.setattr(users, "get_supabase_client", lambda: None)

    with pytest.raises(ConfigurationMissing):
        route_store.load_route(uuid.uuid4())
