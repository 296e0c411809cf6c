from __future__ import annotations

import pytest

from weathertool.core.providers.opencage import OpenCageGeocoder
from weathertool.core.providers.openmeteo import OpenMeteoProvider
from weathertool.core.services.search import SearchService


@pytest.fixture
def geocode_payload() -> dict:
    return {
        "results": [
            {"geometry": {"lat": 30.2672, "lng": -97.7431}, "formatted": "Austin, Texas, United States of America"},
            {"geometry": {"lat": 45.0, "lng": -93.0}, "formatted": "Austin, Minnesota, United States of America"},
        ],
        "status": {"code": 200, "message": "OK"},
    }


@pytest.fixture
def make_current():
    def _make(**values) -> dict:
        current = {"time": "2024-01-05T13:05", "interval": 900}
        current.update(values)
        return {"latitude": 30.25, "longitude": -97.75, "timezone": "America/Chicago", "current": current}

    return _make


@pytest.fixture
def geocoder() -> OpenCageGeocoder:
    return OpenCageGeocoder(api_key="test-key", base_url="https://geocode.test/json")


@pytest.fixture
def weather_provider() -> OpenMeteoProvider:
    return OpenMeteoProvider(base_url="https://forecast.test/v1/forecast")


@pytest.fixture
def service(geocoder, weather_provider) -> SearchService:
    return SearchService(geocoder=geocoder, weather=weather_provider)
