"""Optional Google Calendar lookup for the planned day."""
from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Dict, List, Optional

from weatherplan.core.codec import format_timestamp
from weatherplan.core.providers.base import HttpSource, SourceError


class GoogleCalendarClient(HttpSource):
    name = "google-calendar"
    base_url = "https://www.googleapis.com/calendar/v3/calendars/primary/events"

    def __init__(self, api_key: str, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = base_url or self.base_url

    def events_for_date(self, day: date, access_token: Optional[str] = None) -> List[Dict[str, Any]]:
        """Return the events of ``day`` (UTC), or an empty list on failure."""
        start = datetime.combine(day, time.min, tzinfo=timezone.utc)
        end = datetime.combine(day, time(23, 59, 59, 999000), tzinfo=timezone.utc)
        params = {
            "timeMin": format_timestamp(start),
            "timeMax": format_timestamp(end),
            "singleEvents": "true",
            "orderBy": "startTime",
        }
        headers = {}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        else:
            params["key"] = self.api_key

        try:
            data = self._json(self._get(self.base_url, params=params, headers=headers))
        except SourceError as exc:
            self._log.warning("Calendar lookup for %s failed: %s", day, exc)
            return []
        items = data.get("items") if isinstance(data, dict) else None
        return list(items or [])

    def create_event(self, event: Dict[str, Any], access_token: str) -> Optional[Dict[str, Any]]:
        """Insert ``event`` into the user's primary calendar; ``None`` on failure."""
        if not access_token:
            raise ValueError("Access token required for creating events")
        try:
            created = self._json(
                self._post(self.base_url, json=event, headers={"Authorization": f"Bearer {access_token}"})
            )
        except SourceError as exc:
            self._log.warning("Creating calendar event failed: %s", exc)
            return None
        return created if isinstance(created, dict) else None


def build_calendar_client(api_key: Optional[str], **kwargs) -> Optional[GoogleCalendarClient]:
    """Return a client when a key is configured, otherwise ``None``."""
    if not api_key:
        return None
    return GoogleCalendarClient(api_key=api_key, **kwargs)
