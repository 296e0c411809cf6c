"""Search service that chains geocoding, weather lookup and formatting."""
from __future__ import annotations

import logging
from typing import Optional

from weathertool.core.abstractions import (
    Alert,
    GeocodingProvider,
    Location,
    LocationQuery,
    Notifier,
    WeatherFieldSelection,
    WeatherProvider,
    WeatherReading,
)
from weathertool.core.formatting import iso_to_regular
from weathertool.core.notifications import NOT_FOUND, TRANSPORT, UNEXPECTED, VALIDATION
from weathertool.core.providers.base import InvalidLocationQuery, NotFound, ProviderError
from weathertool.core.state import SearchState


logger = logging.getLogger(__name__)

GEOCODING = "geocoding"
WEATHER = "weather"
SEARCH = "search"

MISSING_INPUT_MESSAGE = "Please enter both city and country."
LOCATION_NOT_FOUND_MESSAGE = "No geolocation data found for the entered location."
GEOCODING_FAILED_MESSAGE = "An error occurred while fetching geolocation data."
CONDITIONS_NOT_FOUND_MESSAGE = "No current weather data found for this location."
WEATHER_FAILED_MESSAGE = "An error occurred while fetching weather data."
UNEXPECTED_MESSAGE = "An unexpected error occurred. Please try again."


class SearchService:
    """Run one submission: geocode, fetch current conditions, format.

    Failures never propagate to the caller. Each one is reported to the
    notifier as an :class:`Alert` and the affected step yields ``None``.
    """

    def __init__(self, geocoder: GeocodingProvider, weather: WeatherProvider) -> None:
        self.geocoder = geocoder
        self.weather = weather

    def fetch_location(self, query: LocationQuery, notifier: Notifier) -> Optional[Location]:
        try:
            location = self.geocoder.locate(query)
        except InvalidLocationQuery:
            notifier.notify(Alert(GEOCODING, VALIDATION, MISSING_INPUT_MESSAGE))
            return None
        except NotFound as exc:
            logger.info("Geocoder %s found nothing for %s", self.geocoder.name, exc)
            notifier.notify(Alert(GEOCODING, NOT_FOUND, LOCATION_NOT_FOUND_MESSAGE))
            return None
        except ProviderError as exc:
            logger.error("Geocoder %s failed: %s", self.geocoder.name, exc)
            notifier.notify(Alert(GEOCODING, TRANSPORT, GEOCODING_FAILED_MESSAGE))
            return None
        logger.debug("Resolved %s to %s", query, location)
        return location

    def fetch_weather(
        self,
        location: Location,
        selection: WeatherFieldSelection,
        notifier: Notifier,
    ) -> Optional[WeatherReading]:
        try:
            return self.weather.current(location, selection)
        except NotFound:
            logger.info("Weather provider %s returned no current conditions", self.weather.name)
            notifier.notify(Alert(WEATHER, NOT_FOUND, CONDITIONS_NOT_FOUND_MESSAGE))
        except ProviderError as exc:
            logger.error("Weather provider %s failed: %s", self.weather.name, exc)
            notifier.notify(Alert(WEATHER, TRANSPORT, WEATHER_FAILED_MESSAGE))
        return None

    def submit(self, state: SearchState, query: LocationQuery, notifier: Notifier) -> SearchState:
        """Return the state after searching for ``query``.

        On an unexpected exception the state passed in is returned untouched.
        """
        try:
            updated = state.with_query(query)
            location = self.fetch_location(query, notifier)
            if location is None:
                return updated

            updated = updated.set_location(location)
            reading = self.fetch_weather(location, updated.selection, notifier)
            if reading is not None:
                formatted = iso_to_regular(reading.time) if reading.time else None
                updated = updated.set_reading(reading.with_time(formatted))
            return updated
        except Exception:  # noqa: BLE001 - reported to the user as a single alert
            logger.exception("Search for %s failed unexpectedly", query)
            notifier.notify(Alert(SEARCH, UNEXPECTED, UNEXPECTED_MESSAGE))
            return state


__all__ = ["SearchService"]
