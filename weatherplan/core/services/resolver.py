"""Resolve one weather reading by walking sources in priority order."""
from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

import logging

from weatherplan.core.abstractions import Coordinates, ReadingRequest, WeatherReading, WeatherSource
from weatherplan.core.providers.mock import MockSource


logger = logging.getLogger(__name__)


class WeatherResolver:
    """Try each source once, in order, and fall back to generated data.

    Source failures never reach the caller: they are logged and the next
    source is tried. The fallback generator cannot fail, so :meth:`resolve`
    always returns a reading.
    """

    def __init__(
        self,
        sources: Iterable[WeatherSource],
        fallback: Optional[MockSource] = None,
    ) -> None:
        self._sources: List[WeatherSource] = list(sources)
        self._fallback = fallback or MockSource()

    @property
    def sources(self) -> List[WeatherSource]:
        return list(self._sources)

    def resolve(self, coordinates: Coordinates, day: date, location_label: str) -> WeatherReading:
        request = ReadingRequest(coordinates=coordinates, day=day, location_label=location_label)

        for source in self._sources:
            try:
                payload = source.fetch(coordinates, day)
                reading = source.to_reading(payload, request)
            except Exception as exc:  # noqa: BLE001 - source failures fall through to the next source
                logger.warning("Weather source %s failed: %s", source.name, exc)
                continue

            logger.info("Source %s returned weather for %s on %s", source.name, coordinates.label, day)
            return reading

        logger.info("All weather sources failed for %s on %s, using generated data", coordinates.label, day)
        return self._fallback.generate(request)
