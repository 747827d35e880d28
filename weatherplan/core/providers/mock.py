"""Placeholder data generator used when every real source has failed.

The formula only aims at plausible demo values (warmer near the equator and
in July); it is not a climate model and readings are always labelled as
synthetic.
"""
from __future__ import annotations

import logging
import math
import random
from datetime import date, datetime, timezone
from typing import Optional

from ..abstractions import Condition, Coordinates, ReadingRequest, SourceMetadata, SourceName, WeatherReading
from ..conversion import clamp, format_date_label

logger = logging.getLogger(__name__)

MOCK_UNITS = {
    "temperature": "°F",
    "humidity": "%",
    "windSpeed": "mph",
    "precipitation": "mm",
    "pressure": "hPa",
    "solarIrradiance": "kW-h/m²/day",
}

MOCK_NOTE = "Generated mock data for demonstration"


class MockSource:
    name = SourceName.MOCK

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def fetch(self, coordinates: Coordinates, day: date) -> None:
        return None

    def to_reading(self, payload: None, request: ReadingRequest) -> WeatherReading:
        return self.generate(request)

    def generate(self, request: ReadingRequest) -> WeatherReading:
        rng = self._rng
        lat_factor = abs(request.coordinates.latitude) / 90
        # Zero-based month index; peaks in July.
        season_factor = math.cos((request.day.month - 1 - 6) * math.pi / 6)

        base_temp = 80 - lat_factor * 40 + season_factor * 20
        temperature = math.floor(base_temp + rng.random() * 20 - 10)
        humidity = math.floor(rng.random() * 40) + 40
        wind_speed = math.floor(rng.random() * 15) + 5
        rain_chance = math.floor(rng.random() * 100)

        if rain_chance > 70:
            condition = Condition.RAINY
        elif rain_chance > 40:
            condition = Condition.CLOUDY
        else:
            condition = Condition.SUNNY

        logger.info("Generated mock reading for %s on %s", request.coordinates.label, request.day)
        return WeatherReading(
            temperature_f=int(clamp(temperature, 20, 100)),
            humidity_pct=humidity,
            wind_speed_mph=wind_speed,
            rain_chance_pct=rain_chance,
            condition=condition,
            location_label=request.location_label,
            coordinates_label=request.coordinates.label,
            date_label=format_date_label(request.day),
            source_metadata=SourceMetadata(
                source=self.name,
                retrieved_at=datetime.now(tz=timezone.utc),
                units=dict(MOCK_UNITS),
                source_links=(MOCK_NOTE,),
            ),
        )


__all__ = ["MockSource", "MOCK_NOTE"]
