"""Core abstractions for the weather tool domain."""
from __future__ import annotations

from dataclasses import dataclass, fields as dataclass_fields, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Iterator, Mapping, Optional, Protocol, Sequence, Tuple


@dataclass(frozen=True)
class Location:
    """Coordinates resolved by the geocoding provider."""

    lat: float
    long: float

    def as_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "long": self.long}


@dataclass(frozen=True)
class LocationQuery:
    """Free-text location as typed by the user."""

    city: str = ""
    state: str = ""
    country: str = ""

    @classmethod
    def from_values(cls, city: Optional[str], state: Optional[str], country: Optional[str]) -> "LocationQuery":
        return cls(
            city=(city or "").strip(),
            state=(state or "").strip(),
            country=(country or "").strip(),
        )

    def as_dict(self) -> Dict[str, str]:
        return {"city": self.city, "state": self.state, "country": self.country}


class WeatherField(str, Enum):
    """Current-conditions metrics, in request and display order."""

    TEMPERATURE = "temperature_2m"
    RELATIVE_HUMIDITY = "relative_humidity_2m"
    DEWPOINT = "dewpoint_2m"
    APPARENT_TEMPERATURE = "apparent_temperature"
    PRECIPITATION_PROBABILITY = "precipitation_probability"
    PRECIPITATION = "precipitation"
    RAIN = "rain"
    SHOWERS = "showers"
    SNOWFALL = "snowfall"
    SNOW_DEPTH = "snow_depth"

    @property
    def label(self) -> str:
        return _FIELD_META[self][0]

    @property
    def unit(self) -> str:
        return _FIELD_META[self][1]


_FIELD_META: Dict[WeatherField, Tuple[str, str]] = {
    WeatherField.TEMPERATURE: ("Temperature (2m)", "°F"),
    WeatherField.RELATIVE_HUMIDITY: ("Relative Humidity", "%"),
    WeatherField.DEWPOINT: ("Dewpoint (2m)", "°F"),
    WeatherField.APPARENT_TEMPERATURE: ("Apparent Temperature", "°F"),
    WeatherField.PRECIPITATION_PROBABILITY: ("Precipitation Probability", "%"),
    WeatherField.PRECIPITATION: ("Precipitation", "in"),
    WeatherField.RAIN: ("Rain", "in"),
    WeatherField.SHOWERS: ("Showers", "in"),
    WeatherField.SNOWFALL: ("Snowfall", "in"),
    WeatherField.SNOW_DEPTH: ("Snow Depth", "in"),
}

FIELD_ORDER: Tuple[WeatherField, ...] = tuple(WeatherField)


@dataclass(frozen=True)
class WeatherFieldSelection:
    """Set of weather metrics the user wants to request and display.

    Membership is keyed by :class:`WeatherField`; iteration always follows
    ``FIELD_ORDER`` regardless of how the selection was built.
    """

    selected: FrozenSet[WeatherField] = frozenset({WeatherField.TEMPERATURE})

    @classmethod
    def default(cls) -> "WeatherFieldSelection":
        return cls()

    @classmethod
    def from_flags(cls, flags: Sequence[bool]) -> "WeatherFieldSelection":
        if len(flags) != len(FIELD_ORDER):
            raise ValueError(f"expected {len(FIELD_ORDER)} flags, got {len(flags)}")
        return cls(frozenset(field for field, flag in zip(FIELD_ORDER, flags) if flag))

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "WeatherFieldSelection":
        """Build a selection from Open-Meteo identifiers; unknown names raise ``ValueError``."""
        return cls(frozenset(WeatherField(name) for name in names))

    def __iter__(self) -> Iterator[WeatherField]:
        return (field for field in FIELD_ORDER if field in self.selected)

    def __contains__(self, field: object) -> bool:
        return field in self.selected

    def __len__(self) -> int:
        return len(self.selected)

    def toggle(self, field: WeatherField) -> "WeatherFieldSelection":
        return WeatherFieldSelection(self.selected ^ {field})

    def as_flags(self) -> Tuple[bool, ...]:
        return tuple(field in self.selected for field in FIELD_ORDER)

    def requested_fields(self) -> Tuple[str, ...]:
        return tuple(field.value for field in self)


@dataclass(frozen=True)
class WeatherReading:
    """Current conditions as returned by the weather provider.

    Every metric is always present; metrics the provider did not report are
    ``None``. ``time`` holds the provider's ISO timestamp until the
    orchestrator replaces it with the display string.
    """

    temperature_2m: Optional[float] = None
    relative_humidity_2m: Optional[float] = None
    dewpoint_2m: Optional[float] = None
    apparent_temperature: Optional[float] = None
    precipitation_probability: Optional[float] = None
    precipitation: Optional[float] = None
    rain: Optional[float] = None
    showers: Optional[float] = None
    snowfall: Optional[float] = None
    snow_depth: Optional[float] = None
    interval: Optional[int] = None
    time: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "WeatherReading":
        known = {f.name for f in dataclass_fields(cls)}
        return cls(**{key: value for key, value in payload.items() if key in known})

    def value(self, field: WeatherField) -> Optional[float]:
        return getattr(self, field.value)

    def with_time(self, time: Optional[str]) -> "WeatherReading":
        return replace(self, time=time)

    def as_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in dataclass_fields(self)}


@dataclass(frozen=True)
class Alert:
    """A user-visible notification raised while handling a submission."""

    source: str
    kind: str
    message: str


class GeocodingProvider(Protocol):
    """A data source resolving a place name to coordinates."""

    name: str

    def locate(self, query: LocationQuery) -> Location:
        ...


class WeatherProvider(Protocol):
    """A data source returning current conditions for coordinates."""

    name: str

    def current(self, location: Location, selection: WeatherFieldSelection) -> WeatherReading:
        ...


class Notifier(Protocol):
    """Receives alerts destined for the user."""

    def notify(self, alert: Alert) -> None:
        ...


__all__ = [
    "Alert",
    "FIELD_ORDER",
    "GeocodingProvider",
    "Location",
    "LocationQuery",
    "Notifier",
    "WeatherField",
    "WeatherFieldSelection",
    "WeatherProvider",
    "WeatherReading",
]
