"""Place-name lookups against OpenStreetMap Nominatim."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from weatherplan.core.abstractions import Coordinates
from weatherplan.core.providers.base import HttpSource, SourceError


@dataclass(frozen=True)
class Place:
    name: str
    latitude: float
    longitude: float


class NominatimClient(HttpSource):
    """Forward and reverse geocoding; lookups degrade instead of raising."""

    name = "nominatim"
    base_url = "https://nominatim.openstreetmap.org"

    def __init__(self, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.base_url = (base_url or self.base_url).rstrip("/")

    def search(self, query: str, limit: int = 5) -> List[Place]:
        if not query.strip():
            return []
        params = {"format": "json", "q": query, "limit": limit, "addressdetails": 1}
        try:
            results = self._json(self._get(f"{self.base_url}/search", params=params))
        except SourceError as exc:
            self._log.warning("Location search for %r failed: %s", query, exc)
            return []

        places: List[Place] = []
        for item in results if isinstance(results, list) else []:
            try:
                places.append(
                    Place(
                        name=item["display_name"],
                        latitude=float(item["lat"]),
                        longitude=float(item["lon"]),
                    )
                )
            except (KeyError, TypeError, ValueError):
                self._log.debug("Skipping malformed search result: %r", item)
        return places

    def reverse(self, coordinates: Coordinates) -> str:
        params = {
            "format": "json",
            "lat": coordinates.latitude,
            "lon": coordinates.longitude,
            "zoom": 10,
            "addressdetails": 1,
        }
        try:
            result = self._json(self._get(f"{self.base_url}/reverse", params=params))
        except SourceError as exc:
            self._log.warning("Reverse geocoding for %s failed: %s", coordinates.label, exc)
            return coordinates.label
        name = result.get("display_name") if isinstance(result, dict) else None
        return name or coordinates.label
