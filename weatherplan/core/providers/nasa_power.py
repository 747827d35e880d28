"""NASA POWER daily point source."""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from .base import HttpSource, SourceError
from ..abstractions import (
    Coordinates,
    NasaParameters,
    ReadingRequest,
    SourceMetadata,
    SourceName,
    WeatherReading,
)
from ..conversion import (
    NASA_PARAMETERS,
    ConditionThresholds,
    celsius_to_fahrenheit,
    clamp,
    classify_condition,
    extract_nasa_values,
    format_date_label,
    ms_to_mph,
    nasa_date_key,
    rain_chance_from_precipitation,
    round_half_up,
    with_nasa_defaults,
)

NASA_UNITS = {
    "temperature": "°F (converted from °C)",
    "humidity": "%",
    "windSpeed": "mph (converted from m/s)",
    "precipitation": "mm/day",
    "pressure": "kPa",
    "solarIrradiance": "kW-h/m²/day",
}

POWER_HOME = "https://power.larc.nasa.gov/"
POWER_DAILY_DOCS = "https://power.larc.nasa.gov/docs/services/api/temporal/daily/"


class NasaPowerSource(HttpSource):
    """Primary source: one day of POWER point climatology for a location."""

    name = SourceName.NASA_POWER
    base_url = "https://power.larc.nasa.gov/api/temporal/daily/point"

    def __init__(
        self,
        base_url: Optional[str] = None,
        community: str = "AG",
        thresholds: Optional[ConditionThresholds] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.base_url = base_url or self.base_url
        self.community = community
        self.thresholds = thresholds or ConditionThresholds()

    def query_params(self, coordinates: Coordinates, day: date) -> Dict[str, str]:
        key = nasa_date_key(day)
        return {
            "parameters": ",".join(NASA_PARAMETERS),
            "community": self.community,
            "longitude": f"{coordinates.longitude}",
            "latitude": f"{coordinates.latitude}",
            "start": key,
            "end": key,
            "format": "JSON",
        }

    def query_url(self, coordinates: Coordinates, day: date) -> str:
        query = "&".join(f"{k}={v}" for k, v in self.query_params(coordinates, day).items())
        return f"{self.base_url}?{query}"

    def fetch(self, coordinates: Coordinates, day: date) -> Dict[str, Any]:
        response = self._get(self.base_url, params=self.query_params(coordinates, day))
        payload = self._json(response)
        parameters = self._parameters(payload)
        values = extract_nasa_values(parameters, day)
        if all(value is None for value in values.values()):
            raise SourceError(f"no data for {nasa_date_key(day)}")
        self._log.debug("POWER returned %s for %s", sorted(k for k, v in values.items() if v is not None), day)
        return payload

    def to_reading(self, payload: Dict[str, Any], request: ReadingRequest) -> WeatherReading:
        values = with_nasa_defaults(extract_nasa_values(self._parameters(payload), request.day))
        precipitation = values["PRECTOTCORR"]
        return WeatherReading(
            temperature_f=celsius_to_fahrenheit(values["T2M"]),
            humidity_pct=round_half_up(clamp(values["RH2M"], 0, 100)),
            wind_speed_mph=ms_to_mph(max(0.0, values["WS10M"])),
            rain_chance_pct=rain_chance_from_precipitation(precipitation),
            condition=classify_condition(precipitation, values["ALLSKY_SFC_SW_DWN"], self.thresholds),
            location_label=request.location_label,
            coordinates_label=request.coordinates.label,
            date_label=format_date_label(request.day),
            nasa_parameters=NasaParameters(**values),
            source_metadata=SourceMetadata(
                source=self.name,
                api_version="v1",
                retrieved_at=datetime.now(tz=timezone.utc),
                units=dict(NASA_UNITS),
                source_links=(
                    POWER_HOME,
                    POWER_DAILY_DOCS,
                    self.query_url(request.coordinates, request.day),
                ),
            ),
        )

    @staticmethod
    def _parameters(payload: Any) -> Dict[str, Any]:
        properties = payload.get("properties") if isinstance(payload, dict) else None
        parameters = properties.get("parameter") if isinstance(properties, dict) else None
        if not isinstance(parameters, dict):
            raise SourceError("missing properties.parameter")
        return parameters


__all__ = ["NasaPowerSource", "NASA_UNITS"]
