from __future__ import annotations

import random
from datetime import date, datetime, timezone

from payloads import NASA_URL, OPENWEATHER_URL, nasa_payload, openweather_payload
from weatherplan.core.abstractions import (
    Condition,
    Coordinates,
    ReadingRequest,
    SourceMetadata,
    SourceName,
    WeatherReading,
)
from weatherplan.core.providers.mock import MockSource
from weatherplan.core.providers.nasa_power import NasaPowerSource
from weatherplan.core.providers.openweather import OpenWeatherSource
from weatherplan.core.services.resolver import WeatherResolver

DAY = date(2024, 7, 4)
NYC = Coordinates(latitude=40.7128, longitude=-74.006)


class _DummySource:
    name = "dummy"

    def __init__(self) -> None:
        self.calls = 0

    def fetch(self, coordinates: Coordinates, day: date) -> dict:
        self.calls += 1
        return {"temp": 55}

    def to_reading(self, payload: dict, request: ReadingRequest) -> WeatherReading:
        return WeatherReading(
            temperature_f=payload["temp"],
            humidity_pct=40,
            wind_speed_mph=3,
            rain_chance_pct=10,
            condition=Condition.SUNNY,
            location_label=request.location_label,
            coordinates_label=request.coordinates.label,
            date_label="",
            source_metadata=SourceMetadata(
                source=self.name,
                retrieved_at=datetime.now(tz=timezone.utc),
                units={},
                source_links=(),
            ),
        )


class _FailingSource:
    name = "failing"

    def __init__(self) -> None:
        self.calls = 0

    def fetch(self, coordinates: Coordinates, day: date) -> dict:
        self.calls += 1
        raise RuntimeError("boom")

    def to_reading(self, payload: dict, request: ReadingRequest) -> WeatherReading:  # pragma: no cover
        raise AssertionError("not reached")


class _BrokenConverter(_DummySource):
    name = "broken"

    def to_reading(self, payload: dict, request: ReadingRequest) -> WeatherReading:
        raise KeyError("main")


def test_resolver_short_circuits_on_first_success() -> None:
    first = _DummySource()
    second = _DummySource()
    resolver = WeatherResolver([first, second])

    reading = resolver.resolve(NYC, DAY, "New York")

    assert reading.temperature_f == 55
    assert first.calls == 1
    assert second.calls == 0


def test_resolver_uses_fallback_source() -> None:
    failing = _FailingSource()
    fallback = _DummySource()
    resolver = WeatherResolver([failing, fallback])

    reading = resolver.resolve(NYC, DAY, "New York")

    assert failing.calls == 1
    assert fallback.calls == 1
    assert reading.source == "dummy"


def test_resolver_treats_conversion_errors_as_source_failure() -> None:
    fallback = _DummySource()
    resolver = WeatherResolver([_BrokenConverter(), fallback])

    assert resolver.resolve(NYC, DAY, "New York").source == "dummy"


def test_resolver_generates_data_when_all_fail() -> None:
    failing = _FailingSource()
    resolver = WeatherResolver([failing, _FailingSource()], fallback=MockSource(rng=random.Random(3)))

    reading = resolver.resolve(NYC, DAY, "New York")

    assert failing.calls == 1
    assert reading.source == SourceName.MOCK
    assert 0 <= reading.humidity_pct <= 100
    assert 0 <= reading.rain_chance_pct <= 100
    assert reading.location_label == "New York"


def test_resolver_with_no_sources_still_returns_reading() -> None:
    reading = WeatherResolver([]).resolve(NYC, DAY, "Anywhere")

    assert reading.source == SourceName.MOCK
    assert reading.condition in Condition.ALL


def test_full_chain_falls_back_to_openweather(requests_mock) -> None:
    resolver = WeatherResolver(
        [
            NasaPowerSource(base_url=NASA_URL),
            OpenWeatherSource(api_key="secret", base_url=OPENWEATHER_URL),
        ]
    )
    requests_mock.get(NASA_URL, status_code=503, text="maintenance")
    requests_mock.get(OPENWEATHER_URL, json=openweather_payload("Clouds"))

    reading = resolver.resolve(NYC, DAY, "New York")

    assert reading.source == SourceName.OPENWEATHER
    assert reading.condition == Condition.CLOUDY
    assert requests_mock.call_count == 2


def test_full_chain_prefers_nasa(requests_mock) -> None:
    resolver = WeatherResolver(
        [
            NasaPowerSource(base_url=NASA_URL),
            OpenWeatherSource(api_key="secret", base_url=OPENWEATHER_URL),
        ]
    )
    requests_mock.get(NASA_URL, json=nasa_payload(DAY))
    requests_mock.get(OPENWEATHER_URL, json=openweather_payload())

    reading = resolver.resolve(NYC, DAY, "New York")

    assert reading.source == SourceName.NASA_POWER
    assert requests_mock.call_count == 1


def test_full_chain_ends_in_mock(requests_mock) -> None:
    resolver = WeatherResolver(
        [
            NasaPowerSource(base_url=NASA_URL),
            OpenWeatherSource(api_key="secret", base_url=OPENWEATHER_URL),
        ]
    )
    requests_mock.get(NASA_URL, status_code=500, text="server error")
    requests_mock.get(OPENWEATHER_URL, status_code=401, json={"cod": 401, "message": "Invalid API key"})

    reading = resolver.resolve(NYC, DAY, "New York")

    assert reading.source == SourceName.MOCK
    assert requests_mock.call_count == 2
