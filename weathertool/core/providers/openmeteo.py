from __future__ import annotations

from typing import Dict, Optional, Union

from .base import HttpProvider, MissingCurrentConditions
from ..abstractions import Location, WeatherFieldSelection, WeatherReading


class OpenMeteoProvider(HttpProvider):
    name = "openmeteo"
    base_url = "https://api.open-meteo.com/v1/forecast"

    # Units are fixed for display; the timezone follows the coordinates.
    unit_params: Dict[str, str] = {
        "temperature_unit": "fahrenheit",
        "wind_speed_unit": "mph",
        "precipitation_unit": "inch",
        "timezone": "auto",
    }

    def __init__(self, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.base_url = base_url or self.base_url

    def build_params(self, location: Location, selection: WeatherFieldSelection) -> Dict[str, Union[str, float]]:
        params: Dict[str, Union[str, float]] = {
            "latitude": location.lat,
            "longitude": location.long,
            "current": ",".join(selection.requested_fields()),
        }
        params.update(self.unit_params)
        return params

    def current(self, location: Location, selection: WeatherFieldSelection) -> WeatherReading:
        response = self._request("GET", self.base_url, params=self.build_params(location, selection))
        data = self._json(response)
        current = data.get("current") if isinstance(data, dict) else None
        if not isinstance(current, dict):
            raise MissingCurrentConditions("missing current weather")
        return WeatherReading.from_payload(current)


__all__ = ["OpenMeteoProvider"]
