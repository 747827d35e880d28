"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from weatherplan.api.views import (
    CalendarEventsView,
    DownloadView,
    GeocodeSearchView,
    ReverseGeocodeView,
    WeatherView,
)

urlpatterns = [
    path("weather", WeatherView.as_view(), name="weather"),
    path("download", DownloadView.as_view(), name="download"),
    path("geocode/search", GeocodeSearchView.as_view(), name="geocode-search"),
    path("geocode/reverse", ReverseGeocodeView.as_view(), name="geocode-reverse"),
    path("calendar/events", CalendarEventsView.as_view(), name="calendar-events"),
]
