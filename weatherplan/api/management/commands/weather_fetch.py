"""Management command to resolve weather using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from weatherplan.api.views import get_weather_resolver, parse_request_date
from weatherplan.core.abstractions import Coordinates, InvalidCoordinates
from weatherplan.core.codec import reading_to_payload


class Command(BaseCommand):
    help = "Resolve the weather reading for the provided coordinates and date"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--lat", type=float, required=True, help="Latitude")
        parser.add_argument("--lon", type=float, required=True, help="Longitude")
        parser.add_argument("--date", type=str, required=True, help="ISO-8601 date, e.g. 2024-07-04")
        parser.add_argument("--location", type=str, default=None, help="Display name (defaults to the coordinates)")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        try:
            coordinates = Coordinates(latitude=options["lat"], longitude=options["lon"])
        except InvalidCoordinates as exc:
            raise CommandError(str(exc)) from exc
        try:
            day = parse_request_date(options["date"])
        except ValueError as exc:
            raise CommandError(str(exc)) from exc

        location = options.get("location") or coordinates.label
        reading = get_weather_resolver().resolve(coordinates, day, location)
        self.stdout.write(json.dumps(reading_to_payload(reading), ensure_ascii=False))
