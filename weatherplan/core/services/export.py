"""Materialize a reading as a downloadable CSV or JSON file."""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, List, Optional

from weatherplan.core.abstractions import SourceName, WeatherReading
from weatherplan.core.codec import format_timestamp, reading_to_payload

CSV_HEADERS = [
    "Location",
    "Coordinates",
    "Date",
    "Temperature",
    "Humidity",
    "Wind Speed",
    "Rain Chance",
    "Conditions",
    "Data Source",
    "Source Links",
    "Temperature Unit",
    "Humidity Unit",
    "Wind Speed Unit",
    "Data Retrieved",
]

NASA_CSV_HEADERS = [
    "NASA Temperature (°C)",
    "NASA Humidity (%)",
    "NASA Wind Speed (m/s)",
    "NASA Precipitation (mm/day)",
    "NASA Solar Irradiance (kW-h/m²/day)",
    "NASA Surface Pressure (kPa)",
]

CONTENT_TYPES = {
    "csv": "text/csv",
    "json": "application/json",
}

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9]")


class UnsupportedFormat(ValueError):
    """Raised for export formats other than csv/json."""


@dataclass(frozen=True)
class ExportFile:
    content: bytes
    filename: str
    content_type: str


def sanitize_filename_fragment(value: str) -> str:
    """Replace every character outside [A-Za-z0-9] with a hyphen."""
    return _UNSAFE_FILENAME_CHARS.sub("-", value)


def export_filename(location: str, fmt: str, today: Optional[date] = None) -> str:
    today = today or datetime.now(tz=timezone.utc).date()
    return f"weather-data-{sanitize_filename_fragment(location)}-{today.isoformat()}.{fmt}"


def _cell(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    # Embedded quotes are written as-is.
    return f'"{value}"'


def to_csv(reading: WeatherReading) -> str:
    meta = reading.source_metadata
    headers: List[str] = list(CSV_HEADERS)
    values: List[Any] = [
        reading.location_label,
        reading.coordinates_label,
        reading.date_label,
        reading.temperature_f,
        reading.humidity_pct,
        reading.wind_speed_mph,
        reading.rain_chance_pct,
        reading.condition,
        meta.source,
        "; ".join(meta.source_links),
        meta.units.get("temperature", ""),
        meta.units.get("humidity", ""),
        meta.units.get("windSpeed", ""),
        format_timestamp(meta.retrieved_at),
    ]

    nasa = reading.nasa_parameters
    if meta.source == SourceName.NASA_POWER and nasa is not None:
        headers.extend(NASA_CSV_HEADERS)
        values.extend([nasa.T2M, nasa.RH2M, nasa.WS10M, nasa.PRECTOTCORR, nasa.ALLSKY_SFC_SW_DWN, nasa.PS])

    return "\n".join([",".join(headers), ",".join(_cell(v) for v in values)])


def to_json(reading: WeatherReading) -> str:
    return json.dumps(reading_to_payload(reading), indent=2, ensure_ascii=False)


def encode(reading: WeatherReading, fmt: str, today: Optional[date] = None) -> ExportFile:
    if fmt == "csv":
        body = to_csv(reading)
    elif fmt == "json":
        body = to_json(reading)
    else:
        raise UnsupportedFormat("Invalid format. Use 'csv' or 'json'")
    return ExportFile(
        content=body.encode("utf-8"),
        filename=export_filename(reading.location_label, fmt, today),
        content_type=CONTENT_TYPES[fmt],
    )
