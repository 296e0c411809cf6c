"""Display helpers for weather readings."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from .abstractions import WeatherFieldSelection, WeatherReading

NOT_AVAILABLE = "N/A"


def iso_to_regular(iso_string: str) -> str:
    """Render an ISO-8601 timestamp as ``MM/DD/YYYY, hh:mm:ss AM|PM``.

    Naive timestamps are taken as local wall time. Timestamps with an offset
    are converted to the host's local time first.
    """
    value = iso_string.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    moment = datetime.fromisoformat(value)
    if moment.tzinfo is not None:
        moment = moment.astimezone()

    meridiem = "PM" if moment.hour >= 12 else "AM"
    hour = moment.hour % 12 or 12
    return (
        f"{moment.month:02d}/{moment.day:02d}/{moment.year}, "
        f"{hour:02d}:{moment.minute:02d}:{moment.second:02d} {meridiem}"
    )


def format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_measurement(value: Optional[float], unit: str) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{format_number(value)} {unit}"


def display_rows(reading: WeatherReading, selection: WeatherFieldSelection) -> List[Tuple[str, str]]:
    """Label/value pairs for every selected field, in field order."""
    return [(field.label, format_measurement(reading.value(field), field.unit)) for field in selection]


__all__ = ["NOT_AVAILABLE", "display_rows", "format_measurement", "format_number", "iso_to_regular"]
