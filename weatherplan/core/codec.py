"""Translate readings to and from the JSON shape the browser client uses."""
from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Dict, Mapping

from weatherplan.core.abstractions import NasaParameters, SourceMetadata, SourceName, WeatherReading


class ReadingDecodeError(ValueError):
    """Raised when a payload does not describe a weather reading."""


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def reading_to_payload(reading: WeatherReading) -> Dict[str, Any]:
    meta = reading.source_metadata
    metadata: Dict[str, Any] = {"source": meta.source}
    if meta.api_version:
        metadata["apiVersion"] = meta.api_version
    metadata["dataDate"] = format_timestamp(meta.retrieved_at)
    metadata["units"] = dict(meta.units)
    metadata["sourceLinks"] = list(meta.source_links)

    payload: Dict[str, Any] = {
        "temperature": reading.temperature_f,
        "humidity": reading.humidity_pct,
        "windSpeed": reading.wind_speed_mph,
        "rainChance": reading.rain_chance_pct,
        "conditions": reading.condition,
        "location": reading.location_label,
        "coordinates": reading.coordinates_label,
        "date": reading.date_label,
    }
    if reading.nasa_parameters is not None:
        payload["nasaData"] = asdict(reading.nasa_parameters)
    payload["metadata"] = metadata
    return payload


def reading_from_payload(payload: Mapping[str, Any]) -> WeatherReading:
    """Rebuild a reading sent back by the client (e.g. for export)."""
    try:
        meta = payload["metadata"]
        source = meta["source"]
        if source not in SourceName.ALL:
            raise ReadingDecodeError(f"unknown source {source!r}")
        nasa = payload.get("nasaData")
        retrieved_at = parse_timestamp(meta["dataDate"])
        # Must survive the UTC conversion done on export.
        format_timestamp(retrieved_at)
        return WeatherReading(
            temperature_f=payload["temperature"],
            humidity_pct=payload["humidity"],
            wind_speed_mph=payload["windSpeed"],
            rain_chance_pct=payload["rainChance"],
            condition=payload["conditions"],
            location_label=str(payload["location"]),
            coordinates_label=str(payload["coordinates"]),
            date_label=str(payload["date"]),
            nasa_parameters=NasaParameters(**nasa) if nasa else None,
            source_metadata=SourceMetadata(
                source=source,
                api_version=meta.get("apiVersion"),
                retrieved_at=retrieved_at,
                units={str(k): str(v) for k, v in meta["units"].items()},
                source_links=tuple(str(link) for link in meta["sourceLinks"]),
            ),
        )
    except ReadingDecodeError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError, OverflowError) as exc:
        raise ReadingDecodeError(f"malformed weather data: {exc}") from exc
