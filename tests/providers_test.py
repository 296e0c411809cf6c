from __future__ import annotations

from urllib.parse import parse_qs, urlparse

import pytest
import requests

from weathertool.core.abstractions import Location, LocationQuery, WeatherFieldSelection
from weathertool.core.providers.base import (
    InvalidLocationQuery,
    LocationNotFound,
    MissingCurrentConditions,
    ProviderError,
)
from weathertool.core.providers.opencage import build_query


def query_params(request) -> dict:
    return parse_qs(urlparse(request.url).query)


def test_build_query_with_state():
    query = LocationQuery(city="Austin", state="Texas", country="US")

    assert build_query(query) == "Austin, Texas, US"


def test_build_query_without_state_has_no_doubled_delimiter():
    query = LocationQuery.from_values("Paris", "   ", "France")

    built = build_query(query)

    assert built == "Paris, France"
    assert ", ," not in built
    assert ",," not in built


@pytest.mark.parametrize("city,country", [("", "France"), ("Paris", ""), ("  ", "  ")])
def test_build_query_requires_city_and_country(city, country):
    with pytest.raises(InvalidLocationQuery):
        build_query(LocationQuery.from_values(city, "", country))


def test_opencage_returns_first_result(requests_mock, geocoder, geocode_payload):
    requests_mock.get(geocoder.base_url, json=geocode_payload)

    location = geocoder.locate(LocationQuery(city="Austin", state="Texas", country="US"))

    assert location == Location(lat=30.2672, long=-97.7431)
    params = query_params(requests_mock.last_request)
    assert params["q"] == ["Austin, Texas, US"]
    assert params["key"] == ["test-key"]


def test_opencage_missing_city_makes_no_request(requests_mock, geocoder):
    requests_mock.get(geocoder.base_url, json={"results": []})

    with pytest.raises(InvalidLocationQuery):
        geocoder.locate(LocationQuery(city="", country="France"))

    assert requests_mock.call_count == 0


def test_opencage_empty_results(requests_mock, geocoder):
    requests_mock.get(geocoder.base_url, json={"results": [], "total_results": 0})

    with pytest.raises(LocationNotFound):
        geocoder.locate(LocationQuery(city="Nowhere", country="Atlantis"))


def test_opencage_http_error(requests_mock, geocoder):
    requests_mock.get(geocoder.base_url, status_code=401, json={"status": {"code": 401, "message": "invalid API key"}})

    with pytest.raises(ProviderError) as excinfo:
        geocoder.locate(LocationQuery(city="Austin", country="US"))

    assert not isinstance(excinfo.value, LocationNotFound)


def test_opencage_network_error(requests_mock, geocoder):
    requests_mock.get(geocoder.base_url, exc=requests.ConnectionError("connection refused"))

    with pytest.raises(ProviderError):
        geocoder.locate(LocationQuery(city="Austin", country="US"))


def test_opencage_invalid_json(requests_mock, geocoder):
    requests_mock.get(geocoder.base_url, text="<html>gateway</html>")

    with pytest.raises(ProviderError):
        geocoder.locate(LocationQuery(city="Austin", country="US"))


def test_openmeteo_requests_selected_fields_in_order(requests_mock, weather_provider, make_current):
    requests_mock.get(weather_provider.base_url, json=make_current(temperature_2m=41.2, apparent_temperature=37.0, showers=0.0))
    flags = [index in {0, 3, 7} for index in range(10)]

    weather_provider.current(Location(lat=30.2672, long=-97.7431), WeatherFieldSelection.from_flags(flags))

    params = query_params(requests_mock.last_request)
    assert params["current"] == ["temperature_2m,apparent_temperature,showers"]
    assert params["latitude"] == ["30.2672"]
    assert params["longitude"] == ["-97.7431"]
    assert params["temperature_unit"] == ["fahrenheit"]
    assert params["wind_speed_unit"] == ["mph"]
    assert params["precipitation_unit"] == ["inch"]
    assert params["timezone"] == ["auto"]


def test_openmeteo_reading_fills_unselected_with_none(requests_mock, weather_provider, make_current):
    requests_mock.get(weather_provider.base_url, json=make_current(temperature_2m=41.2, relative_humidity_2m=63))
    selection = WeatherFieldSelection.from_names(["temperature_2m", "relative_humidity_2m"])

    reading = weather_provider.current(Location(lat=1.0, long=2.0), selection)

    assert reading.temperature_2m == 41.2
    assert reading.relative_humidity_2m == 63
    assert reading.snow_depth is None
    assert reading.showers is None
    assert reading.time == "2024-01-05T13:05"
    assert reading.interval == 900


def test_openmeteo_missing_current_section(requests_mock, weather_provider):
    requests_mock.get(weather_provider.base_url, json={"latitude": 1.0, "longitude": 2.0})

    with pytest.raises(MissingCurrentConditions):
        weather_provider.current(Location(lat=1.0, long=2.0), WeatherFieldSelection.default())


def test_openmeteo_http_error(requests_mock, weather_provider):
    requests_mock.get(weather_provider.base_url, status_code=400, json={"error": True, "reason": "bad field"})

    with pytest.raises(ProviderError) as excinfo:
        weather_provider.current(Location(lat=1.0, long=2.0), WeatherFieldSelection.default())

    assert not isinstance(excinfo.value, MissingCurrentConditions)
