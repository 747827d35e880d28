"""Core abstractions for the weather planning domain."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Optional, Protocol, Tuple


class Condition:
    """Coarse sky/precipitation classification."""

    SUNNY = "sunny"
    CLOUDY = "cloudy"
    RAINY = "rainy"

    ALL = (SUNNY, CLOUDY, RAINY)


class SourceName:
    """Identifiers of the weather sources, as exposed in reading metadata."""

    NASA_POWER = "NASA_POWER"
    OPENWEATHER = "OpenWeather"
    MOCK = "Mock"

    ALL = (NASA_POWER, OPENWEATHER, MOCK)


class InvalidCoordinates(ValueError):
    """Raised when a latitude/longitude pair is not finite or out of range."""


@dataclass(frozen=True, slots=True)
class Coordinates:
    """A validated point on the globe."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        for name, value, limit in (("latitude", self.latitude, 90.0), ("longitude", self.longitude, 180.0)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidCoordinates(f"{name} must be a number")
            if not math.isfinite(value):
                raise InvalidCoordinates(f"{name} must be a finite number")
            if not -limit <= value <= limit:
                raise InvalidCoordinates(f"{name} must be between {-limit:g} and {limit:g}")

    @classmethod
    def parse(cls, latitude: Any, longitude: Any) -> "Coordinates":
        """Build coordinates from raw (usually string) request values."""
        try:
            lat = float(latitude)
            lon = float(longitude)
        except (TypeError, ValueError) as exc:
            raise InvalidCoordinates("latitude and longitude must be valid numbers") from exc
        return cls(latitude=lat, longitude=lon)

    @property
    def label(self) -> str:
        return f"{self.latitude:.4f}, {self.longitude:.4f}"


@dataclass(frozen=True, slots=True)
class SourceMetadata:
    """Provenance of a reading, carried through to display and export."""

    source: str
    retrieved_at: datetime
    units: Dict[str, str]
    source_links: Tuple[str, ...]
    api_version: Optional[str] = None


@dataclass(frozen=True, slots=True)
class NasaParameters:
    """Raw NASA POWER daily values in their native units."""

    T2M: float
    RH2M: float
    WS10M: float
    PRECTOTCORR: float
    ALLSKY_SFC_SW_DWN: float
    PS: float


@dataclass(frozen=True, slots=True)
class WeatherReading:
    """Normalized weather record for one location and date."""

    temperature_f: int
    humidity_pct: int
    wind_speed_mph: int
    rain_chance_pct: int
    condition: str
    location_label: str
    coordinates_label: str
    date_label: str
    source_metadata: SourceMetadata
    nasa_parameters: Optional[NasaParameters] = field(default=None)

    @property
    def source(self) -> str:
        return self.source_metadata.source


@dataclass(frozen=True, slots=True)
class ReadingRequest:
    """What the caller asked for; handed to a source's converter."""

    coordinates: Coordinates
    day: date
    location_label: str


class WeatherSource(Protocol):
    """A provider the resolver can try, in priority order."""

    name: str

    def fetch(self, coordinates: Coordinates, day: date) -> Any:
        """Return the raw provider payload or raise ``SourceError``."""
        ...

    def to_reading(self, payload: Any, request: ReadingRequest) -> WeatherReading:
        """Convert a payload from :meth:`fetch` into a normalized reading."""
        ...
