from .base import InvalidLocationQuery, LocationNotFound, MissingCurrentConditions, NotFound, ProviderError
from .opencage import OpenCageGeocoder
from .openmeteo import OpenMeteoProvider

__all__ = [
    "InvalidLocationQuery",
    "LocationNotFound",
    "MissingCurrentConditions",
    "NotFound",
    "OpenCageGeocoder",
    "OpenMeteoProvider",
    "ProviderError",
]
