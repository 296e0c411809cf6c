from __future__ import annotations

from typing import Optional

from .base import HttpProvider, InvalidLocationQuery, LocationNotFound, ProviderError
from ..abstractions import Location, LocationQuery


def build_query(query: LocationQuery) -> str:
    """Join city, optional state and country into the geocoder's ``q`` value."""
    if not query.city or not query.country:
        raise InvalidLocationQuery("city and country are required")
    parts = [query.city]
    if query.state:
        parts.append(query.state)
    parts.append(query.country)
    return ", ".join(parts)


class OpenCageGeocoder(HttpProvider):
    name = "opencage"
    base_url = "https://api.opencagedata.com/geocode/v1/json"

    def __init__(self, api_key: str, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = base_url or self.base_url

    def locate(self, query: LocationQuery) -> Location:
        params = {"q": build_query(query), "key": self.api_key}
        response = self._request("GET", self.base_url, params=params)
        data = self._json(response)
        if not isinstance(data, dict):
            raise ProviderError("unexpected geocoding payload")
        results = data.get("results") or []
        if not results:
            raise LocationNotFound(params["q"])
        geometry = results[0].get("geometry") or {}
        try:
            return Location(lat=float(geometry["lat"]), long=float(geometry["lng"]))
        except (KeyError, TypeError, ValueError) as exc:
            self._log.error("Malformed geometry in first result: %r", geometry)
            raise ProviderError("malformed geometry") from exc


__all__ = ["OpenCageGeocoder", "build_query"]
