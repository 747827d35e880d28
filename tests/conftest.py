from __future__ import annotations

import pytest
from django.test import override_settings

from payloads import CALENDAR_URL, NASA_URL, NOMINATIM_URL, OPENWEATHER_URL
from weatherplan.api import views


@pytest.fixture(autouse=True)
def _reset_collaborators():
    views.get_weather_resolver.cache_clear()
    views.get_geocoder.cache_clear()
    views.get_calendar_client.cache_clear()
    yield
    views.get_weather_resolver.cache_clear()
    views.get_geocoder.cache_clear()
    views.get_calendar_client.cache_clear()


@pytest.fixture()
def source_settings():
    """Point every upstream at a test host; optional integrations disabled."""
    with override_settings(
        NASA_POWER_URL=NASA_URL,
        OPENWEATHER_URL=OPENWEATHER_URL,
        OPENWEATHER_API_KEY=None,
        NOMINATIM_URL=NOMINATIM_URL,
        GOOGLE_CALENDAR_URL=CALENDAR_URL,
        GOOGLE_CALENDAR_API_KEY=None,
    ):
        yield
