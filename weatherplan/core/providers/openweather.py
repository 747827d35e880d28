"""OpenWeather current conditions source."""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from .base import HttpSource, SourceError
from ..abstractions import Condition, Coordinates, ReadingRequest, SourceMetadata, SourceName, WeatherReading
from ..conversion import clamp, format_date_label, round_half_up

OPENWEATHER_UNITS = {
    "temperature": "°F",
    "humidity": "%",
    "windSpeed": "mph",
    "precipitation": "mm",
    "pressure": "hPa",
    "solarIrradiance": "kW-h/m²/day",
}

_CONDITIONS = {
    "clear": Condition.SUNNY,
    "clouds": Condition.CLOUDY,
    "rain": Condition.RAINY,
    "drizzle": Condition.RAINY,
    "thunderstorm": Condition.RAINY,
}


def map_condition(main: str) -> str:
    return _CONDITIONS.get((main or "").lower(), Condition.CLOUDY)


class OpenWeatherSource(HttpSource):
    """Fallback source; only reports current conditions, whatever the date."""

    name = SourceName.OPENWEATHER
    base_url = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(self, *, api_key: str, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = base_url or self.base_url

    def fetch(self, coordinates: Coordinates, day: date) -> Dict[str, Any]:
        params = {
            "lat": coordinates.latitude,
            "lon": coordinates.longitude,
            "appid": self.api_key,
            "units": "imperial",
        }
        payload = self._json(self._get(self.base_url, params=params))
        if not isinstance(payload, dict) or not isinstance(payload.get("main"), dict):
            raise SourceError("missing main block")
        if not payload.get("weather"):
            raise SourceError("missing weather block")
        return payload

    def to_reading(self, payload: Dict[str, Any], request: ReadingRequest) -> WeatherReading:
        main = payload["main"]
        wind = payload.get("wind") or {}
        rain = payload.get("rain") or {}
        try:
            rain_chance = round_half_up(clamp(float(rain.get("1h") or 0) * 100, 0, 100))
            return WeatherReading(
                temperature_f=round_half_up(float(main["temp"])),
                humidity_pct=round_half_up(clamp(float(main["humidity"]), 0, 100)),
                wind_speed_mph=round_half_up(max(0.0, float(wind.get("speed") or 0))),
                rain_chance_pct=rain_chance,
                condition=map_condition(payload["weather"][0].get("main", "")),
                location_label=request.location_label,
                coordinates_label=request.coordinates.label,
                date_label=format_date_label(request.day),
                source_metadata=SourceMetadata(
                    source=self.name,
                    retrieved_at=datetime.now(tz=timezone.utc),
                    units=dict(OPENWEATHER_UNITS),
                    source_links=("https://openweathermap.org/api",),
                ),
            )
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as exc:
            raise SourceError(f"unexpected payload: {exc}") from exc


__all__ = ["OpenWeatherSource", "map_condition"]
