"""REST API views for weather planning."""
from __future__ import annotations

import logging
from datetime import date
from functools import lru_cache
from typing import Any, List, Mapping, Optional

from django.conf import settings
from django.http import HttpResponse
from django.utils.dateparse import parse_date, parse_datetime
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from weatherplan.core.abstractions import Coordinates, InvalidCoordinates, WeatherSource
from weatherplan.core.calendar_events import GoogleCalendarClient, build_calendar_client
from weatherplan.core.codec import reading_from_payload, reading_to_payload
from weatherplan.core.conversion import ConditionThresholds
from weatherplan.core.geocoding import NominatimClient
from weatherplan.core.providers.base import RequestConfig
from weatherplan.core.providers.nasa_power import NasaPowerSource
from weatherplan.core.providers.openweather import OpenWeatherSource
from weatherplan.core.services.export import encode
from weatherplan.core.services.resolver import WeatherResolver


logger = logging.getLogger(__name__)


def _request_config() -> RequestConfig:
    return RequestConfig(timeout=settings.WEATHER_SOURCE_TIMEOUT, user_agent=settings.WEATHER_USER_AGENT)


@lru_cache(maxsize=1)
def get_weather_resolver() -> WeatherResolver:
    sources: List[WeatherSource] = [
        NasaPowerSource(
            base_url=settings.NASA_POWER_URL,
            community=settings.NASA_POWER_COMMUNITY,
            thresholds=ConditionThresholds(
                rain_mm=settings.WEATHER_RAIN_THRESHOLD_MM,
                cloud_kwh=settings.WEATHER_CLOUD_THRESHOLD_KWH,
            ),
            request_config=_request_config(),
        ),
    ]
    if settings.OPENWEATHER_API_KEY:
        sources.append(
            OpenWeatherSource(
                api_key=settings.OPENWEATHER_API_KEY,
                base_url=settings.OPENWEATHER_URL,
                request_config=_request_config(),
            )
        )
    return WeatherResolver(sources=sources)


@lru_cache(maxsize=1)
def get_geocoder() -> NominatimClient:
    return NominatimClient(base_url=settings.NOMINATIM_URL, request_config=_request_config())


@lru_cache(maxsize=1)
def get_calendar_client() -> Optional[GoogleCalendarClient]:
    return build_calendar_client(
        settings.GOOGLE_CALENDAR_API_KEY,
        base_url=settings.GOOGLE_CALENDAR_URL,
        request_config=_request_config(),
    )


def _first(params: Mapping[str, Any], *names: str) -> Optional[str]:
    for name in names:
        value = params.get(name)
        if value not in (None, ""):
            return value
    return None


def parse_request_date(value: str) -> date:
    """Accept an ISO-8601 date or datetime and return the calendar day."""
    parsed = None
    try:
        parsed = parse_date(value)
        if parsed is None:
            moment = parse_datetime(value)
            parsed = moment.date() if moment else None
    except ValueError:
        parsed = None
    if parsed is None:
        raise ValueError("date must be an ISO-8601 date")
    return parsed


def _error(message: str, code: int = status.HTTP_400_BAD_REQUEST) -> Response:
    return Response({"error": message}, status=code)


class WeatherView(APIView):
    """Resolve a normalized weather reading for a location and date."""

    def get(self, request, *args, **kwargs):  # noqa: D401
        params = request.query_params
        latitude = _first(params, "latitude", "lat")
        longitude = _first(params, "longitude", "lon")
        raw_date = _first(params, "date")
        location = _first(params, "locationLabel", "location")
        if latitude is None or longitude is None or raw_date is None or location is None:
            return _error("Missing required parameters: latitude, longitude, date, locationLabel")

        try:
            coordinates = Coordinates.parse(latitude, longitude)
        except InvalidCoordinates as exc:
            return _error(f"Invalid coordinates: {exc}")
        try:
            day = parse_request_date(raw_date)
        except ValueError as exc:
            return _error(str(exc))

        reading = get_weather_resolver().resolve(coordinates, day, location)
        return Response(reading_to_payload(reading), status=status.HTTP_200_OK)


class DownloadView(APIView):
    """Turn a reading posted back by the client into a CSV or JSON file."""

    def post(self, request, *args, **kwargs):  # noqa: D401
        body = request.data if isinstance(request.data, Mapping) else {}
        weather_data = body.get("weatherData")
        fmt = body.get("format")
        if not weather_data or not fmt:
            return _error("Missing weatherData or format")
        if fmt not in ("csv", "json"):
            return _error("Invalid format. Use 'csv' or 'json'")

        try:
            export = encode(reading_from_payload(weather_data), fmt)
        except Exception:  # noqa: BLE001 - any export failure is reported as a JSON 500
            logger.exception("Failed to generate %s download", fmt)
            return _error("Failed to generate download", status.HTTP_500_INTERNAL_SERVER_ERROR)

        response = HttpResponse(export.content, content_type=export.content_type)
        response["Content-Disposition"] = f'attachment; filename="{export.filename}"'
        return response


class GeocodeSearchView(APIView):
    def get(self, request, *args, **kwargs):  # noqa: D401
        query = request.query_params.get("q", "")
        if not query.strip():
            return _error("Missing required parameter: q")
        try:
            limit = int(request.query_params.get("limit", "5"))
        except ValueError:
            return _error("limit must be an integer")
        if not 1 <= limit <= 50:
            return _error("limit must be between 1 and 50")

        places = get_geocoder().search(query, limit=limit)
        results = [{"name": p.name, "lat": p.latitude, "lon": p.longitude} for p in places]
        return Response({"results": results}, status=status.HTTP_200_OK)


class ReverseGeocodeView(APIView):
    def get(self, request, *args, **kwargs):  # noqa: D401
        params = request.query_params
        try:
            coordinates = Coordinates.parse(_first(params, "latitude", "lat"), _first(params, "longitude", "lon"))
        except InvalidCoordinates as exc:
            return _error(f"Invalid coordinates: {exc}")
        return Response({"name": get_geocoder().reverse(coordinates)}, status=status.HTTP_200_OK)


class CalendarEventsView(APIView):
    """List calendar events for the planned day when a calendar is configured."""

    def get(self, request, *args, **kwargs):  # noqa: D401
        client = get_calendar_client()
        if client is None:
            return _error("Calendar integration is not configured", status.HTTP_503_SERVICE_UNAVAILABLE)

        raw_date = request.query_params.get("date")
        if not raw_date:
            return _error("Missing required parameter: date")
        try:
            day = parse_request_date(raw_date)
        except ValueError as exc:
            return _error(str(exc))

        token = None
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            token = auth_header[len("Bearer "):].strip() or None

        return Response({"events": client.events_for_date(day, access_token=token)}, status=status.HTTP_200_OK)
