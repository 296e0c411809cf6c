"""Page state for the weather search form.

All transitions return a new :class:`SearchState`; the view stores the
result in the session between requests.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional

from .abstractions import Location, LocationQuery, WeatherField, WeatherFieldSelection, WeatherReading

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchState:
    query: LocationQuery = field(default_factory=LocationQuery)
    location: Optional[Location] = None
    reading: Optional[WeatherReading] = None
    selection: WeatherFieldSelection = field(default_factory=WeatherFieldSelection.default)
    settings_open: bool = False

    # Transitions ----------------------------------------------------------
    def with_query(self, query: LocationQuery) -> "SearchState":
        return replace(self, query=query)

    def set_location(self, location: Optional[Location]) -> "SearchState":
        return replace(self, location=location)

    def set_reading(self, reading: Optional[WeatherReading]) -> "SearchState":
        return replace(self, reading=reading)

    def toggle_field(self, weather_field: WeatherField) -> "SearchState":
        return replace(self, selection=self.selection.toggle(weather_field))

    def toggle_settings(self) -> "SearchState":
        return replace(self, settings_open=not self.settings_open)

    # Session serialization ------------------------------------------------
    def to_session(self) -> Dict[str, Any]:
        return {
            "query": self.query.as_dict(),
            "location": self.location.as_dict() if self.location else None,
            "reading": self.reading.as_dict() if self.reading else None,
            "selection": list(self.selection.requested_fields()),
            "settings_open": self.settings_open,
        }

    @classmethod
    def from_session(cls, payload: Optional[Mapping[str, Any]]) -> "SearchState":
        if not payload:
            return cls()
        try:
            query = LocationQuery(**payload.get("query") or {})
            location_data = payload.get("location")
            location = Location(**location_data) if location_data else None
            reading_data = payload.get("reading")
            reading = WeatherReading.from_payload(reading_data) if reading_data else None
            names = payload.get("selection")
            selection = (
                WeatherFieldSelection.from_names(names) if names is not None else WeatherFieldSelection.default()
            )
            return cls(
                query=query,
                location=location,
                reading=reading,
                selection=selection,
                settings_open=bool(payload.get("settings_open", False)),
            )
        except (TypeError, ValueError, AttributeError) as exc:
            logger.warning("Discarding malformed session state: %s", exc)
            return cls()


__all__ = ["SearchState"]
