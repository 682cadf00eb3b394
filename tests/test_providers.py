from datetime import datetime

import httpx
import pytest

from tripweather.services import http_client
from tripweather.services.ev import client as ev_client
from tripweather.services.http_client import ProviderClient
from tripweather.services.location.geoapify import GeoapifyClient, parse_location
from tripweather.services.scheduling.errors import ConfigurationMissing
from tripweather.services.weather.client import WeatherClient, find_matching_period


def _mock(client: ProviderClient, handler, monkeypatch):
    monkeypatch.setattr(client, "_get_client", lambda: httpx.Client(transport=httpx.MockTransport(handler)))
    monkeypatch.setattr(http_client.time, "sleep", lambda seconds: None)


PERIODS = [
    {"startTime": "2024-06-01T06:00:00-06:00", "endTime": "2024-06-01T18:00:00-06:00",
     "shortForecast": "Sunny", "temperature": 78, "temperatureUnit": "F", "windSpeed": "5 mph", "windDirection": "NW"},
    {"startTime": "2024-06-01T18:00:00-06:00", "endTime": "2024-06-02T06:00:00-06:00",
     "shortForecast": "Clear", "temperature": 52, "temperatureUnit": "F", "windSpeed": "3 mph", "windDirection": "S"},
]


def test_find_matching_period_uses_local_wall_clock():
    assert find_matching_period(PERIODS, datetime(2024, 6, 1, 20, 30))["shortForecast"] == "Clear"
    assert find_matching_period(PERIODS, datetime(2024, 6, 1, 6, 0))["shortForecast"] == "Sunny"


def test_find_matching_period_defaults_to_first():
    assert find_matching_period(PERIODS, datetime(2030, 1, 1, 0, 0))["shortForecast"] == "Sunny"
    assert find_matching_period([], datetime(2030, 1, 1)) is None


def test_weather_forecast_follows_points_link(monkeypatch):
    weather = WeatherClient(base_url="https://weather.test")

    def handler(request):
        if request.url.path.startswith("/points/"):
            assert request.url.path == "/points/39.7400,-104.9900"
            return httpx.Response(200, json={"properties": {"forecast": "https://weather.test/gridpoints/BOU/1,2/forecast"}})
        return httpx.Response(200, json={"properties": {"periods": PERIODS}})

    _mock(weather, handler, monkeypatch)

    data = weather.forecast(39.74, -104.99, "2024-06-01", "12:00")

    assert data.condition == "Sunny"
    assert data.temperature == 78
    assert data.error is None


def test_weather_failure_is_reported_in_body(monkeypatch):
    weather = WeatherClient(base_url="https://weather.test", max_retries=1)
    _mock(weather, lambda request: httpx.Response(503, text="busy"), monkeypatch)

    data = weather.forecast(39.74, -104.99, "2024-06-01", "12:00")

    assert data.condition is None
    assert "HTTP 503" in data.error


def test_retries_then_succeeds(monkeypatch):
    calls = []
    client = ProviderClient("https://provider.test", max_retries=2)

    def handler(request):
        calls.append(request)
        if len(calls) < 3:
            return httpx.Response(429)
        return httpx.Response(200, json={"ok": True})

    _mock(client, handler, monkeypatch)

    assert client.get_json("/thing") == {"ok": True}
    assert len(calls) == 3


def test_client_errors_are_not_retried(monkeypatch):
    calls = []
    client = ProviderClient("https://provider.test", max_retries=3)

    def handler(request):
        calls.append(request)
        return httpx.Response(404, text="missing")

    _mock(client, handler, monkeypatch)

    with pytest.raises(ValueError):
        client.get_json("/thing")
    assert len(calls) == 1


def test_transport_failure_becomes_connection_error(monkeypatch):
    client = ProviderClient("https://provider.test", max_retries=1)

    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    _mock(client, handler, monkeypatch)

    with pytest.raises(ConnectionError):
        client.get_json("/thing")


def test_geoapify_requires_key():
    with pytest.raises(ConfigurationMissing):
        GeoapifyClient(api_key="")


def test_parse_location_reads_timezone():
    payload = {
        "features": [
            {
                "properties": {
                    "formatted": "Denver, CO, United States of America",
                    "timezone": {"name": "America/Denver", "offset_STD": "-07:00", "offset_DST": "-06:00",
                                 "abbreviation_STD": "MST", "abbreviation_DST": "MDT"},
                }
            }
        ]
    }

    location = parse_location(payload)

    assert location.formatted.startswith("Denver")
    assert location.timezone.name == "America/Denver"
    assert location.timezone.abbreviation_dst == "MDT"
    assert parse_location({"features": []}).timezone is None


def test_route_to_wkt():
    assert ev_client.route_to_wkt([[-104.99, 39.74], [-105.27, 40.01]]) == "LINESTRING (-104.99 39.74, -105.27 40.01)"
    with pytest.raises(ValueError):
        ev_client.route_to_wkt([])
    with pytest.raises(ValueError):
        ev_client.route_to_wkt([[-104.99, 39.74]])
    with pytest.raises(ValueError):
        ev_client.route_to_wkt([[-104.99, 39.74], [1.0]])


def test_stations_pass_parameters_through(monkeypatch):
    seen = {}
    stations = ev_client.EVChargingClient(api_key="key", base_url="https://nrel.test")

    def fake_post(path, **kwargs):
        seen.update(kwargs, path=path)
        return {"features": [{"id": 1}]}

    monkeypatch.setattr(stations, "post_json", fake_post)

    result = stations.stations_along_route([[-104.99, 39.74], [-105.27, 40.01]], {"distance": 2, "fuel_type": None})

    assert seen["path"] == ev_client.NEARBY_ROUTE_PATH
    assert seen["params"] == {"api_key": "key"}
    assert seen["json"] == {"route": "LINESTRING (-104.99 39.74, -105.27 40.01)", "distance": 2}
    assert result == {"type": "FeatureCollection", "features": [{"id": 1}]}


def test_stations_provider_failure_returns_empty_collection(monkeypatch):
    stations = ev_client.EVChargingClient(api_key="key")

    def fail(path, **kwargs):
        raise ConnectionError("down")

    monkeypatch.setattr(stations, "post_json", fail)

    assert stations.stations_along_route([[0, 0], [1, 1]]) == ev_client.empty_feature_collection()


def test_find_matching_period_skips_malformed_entries():
    assert find_matching_period(["junk", None, PERIODS[1]], datetime(2030, 1, 1))["shortForecast"] == "Clear"
    assert find_matching_period(["junk"], datetime(2030, 1, 1)) is None


def test_weather_with_only_malformed_periods_reports_error(monkeypatch):
    weather = WeatherClient(base_url="https://weather.test")

    def handler(request):
        if request.url.path.startswith("/points/"):
            return httpx.Response(200, json={"properties": {"forecast": "https://weather.test/forecast"}})
        return httpx.Response(200, json={"properties": {"periods": ["junk"]}})

    _mock(weather, handler, monkeypatch)

    data = weather.forecast(39.74, -104.99, "2024-06-01", "12:00")

    assert data.condition is None
    assert data.error == "No forecast available for selected date/time"
