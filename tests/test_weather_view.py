from __future__ import annotations

from datetime import date

import pytest
from django.test import Client, override_settings

from payloads import NASA_URL, OPENWEATHER_URL, nasa_payload, openweather_payload

pytestmark = pytest.mark.usefixtures("source_settings")

PARAMS = {"latitude": "40.7128", "longitude": "-74.006", "date": "2024-07-04", "locationLabel": "New York, NY"}


def test_weather_endpoint_returns_nasa_payload(requests_mock) -> None:
    requests_mock.get(NASA_URL, json=nasa_payload(date(2024, 7, 4)))

    response = Client().get("/api/weather", PARAMS)

    assert response.status_code == 200
    payload = response.json()
    assert payload["temperature"] == 68
    assert payload["windSpeed"] == 11
    assert payload["location"] == "New York, NY"
    assert payload["coordinates"] == "40.7128, -74.0060"
    assert payload["date"] == "Thursday, July 4, 2024"
    assert payload["metadata"]["source"] == "NASA_POWER"
    assert payload["metadata"]["dataDate"].endswith("Z")
    assert payload["nasaData"]["T2M"] == 20.0


def test_weather_endpoint_accepts_short_parameter_names(requests_mock) -> None:
    requests_mock.get(NASA_URL, json=nasa_payload(date(2024, 7, 4)))

    response = Client().get(
        "/api/weather", {"lat": "40.7128", "lon": "-74.006", "date": "2024-07-04T15:00:00Z", "location": "NYC"}
    )

    assert response.status_code == 200
    assert response.json()["location"] == "NYC"


def test_weather_endpoint_falls_back_to_mock(requests_mock) -> None:
    requests_mock.get(NASA_URL, status_code=500, text="server error")

    response = Client().get("/api/weather", PARAMS)

    assert response.status_code == 200
    payload = response.json()
    assert payload["metadata"]["source"] == "Mock"
    assert payload["metadata"]["sourceLinks"] == ["Generated mock data for demonstration"]
    assert 20 <= payload["temperature"] <= 100
    assert "nasaData" not in payload
    # OpenWeather has no key configured, so it is never called.
    assert requests_mock.call_count == 1


def test_weather_endpoint_uses_openweather_when_configured(requests_mock) -> None:
    requests_mock.get(NASA_URL, status_code=500, text="server error")
    requests_mock.get(OPENWEATHER_URL, json=openweather_payload("Clear"))

    with override_settings(OPENWEATHER_API_KEY="secret"):
        response = Client().get("/api/weather", PARAMS)

    assert response.status_code == 200
    assert response.json()["metadata"]["source"] == "OpenWeather"
    assert requests_mock.call_count == 2


@pytest.mark.parametrize(
    "overrides",
    [
        {"latitude": "200"},
        {"longitude": "-181"},
        {"latitude": "abc"},
        {"latitude": "NaN"},
        {"date": "04/07/2024"},
        {"date": "2024-02-30"},
    ],
)
def test_weather_endpoint_rejects_invalid_input(requests_mock, overrides) -> None:
    response = Client().get("/api/weather", {**PARAMS, **overrides})

    assert response.status_code == 400
    assert "error" in response.json()
    assert requests_mock.call_count == 0


@pytest.mark.parametrize("missing", ["latitude", "longitude", "date", "locationLabel"])
def test_weather_endpoint_requires_all_parameters(requests_mock, missing) -> None:
    params = {k: v for k, v in PARAMS.items() if k != missing}

    response = Client().get("/api/weather", params)

    assert response.status_code == 400
    assert response.json()["error"].startswith("Missing required parameters")
    assert requests_mock.call_count == 0
