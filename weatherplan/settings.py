"""Base Django settings for the weather planning service."""
from __future__ import annotations

from pathlib import Path
import os

from django.core.exceptions import ImproperlyConfigured

BASE_DIR = Path(__file__).resolve().parent.parent


def env(name: str, default: str | None = None) -> str:
    """Fetch environment variables while allowing explicit defaults."""

    value = os.environ.get(name, default)
    if value is None:
        raise ImproperlyConfigured(f"Environment variable {name} is required")
    return value


SECRET_KEY = env("DJANGO_SECRET_KEY")
DEBUG = os.environ.get("DJANGO_DEBUG", "0") == "1"
ALLOWED_HOSTS = os.environ.get("DJANGO_ALLOWED_HOSTS", "*").split(",")

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "rest_framework",
    "weatherplan.api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "weatherplan.urls"

WSGI_APPLICATION = "weatherplan.wsgi.application"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Nothing is persisted; the in-memory database only satisfies the auth app.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "UNAUTHENTICATED_USER": None,
}

# -- Weather sources --------------------------------------------------------
NASA_POWER_URL = os.environ.get("NASA_POWER_URL", "https://power.larc.nasa.gov/api/temporal/daily/point")
NASA_POWER_COMMUNITY = os.environ.get("NASA_POWER_COMMUNITY", "AG")
OPENWEATHER_API_KEY = os.environ.get("OPENWEATHER_API_KEY") or None
OPENWEATHER_URL = os.environ.get("OPENWEATHER_URL", "https://api.openweathermap.org/data/2.5/weather")
WEATHER_SOURCE_TIMEOUT = float(os.environ.get("WEATHER_SOURCE_TIMEOUT", "10"))
WEATHER_USER_AGENT = os.environ.get("WEATHER_USER_AGENT", "WeatherCheck-App/1.0")

# Condition classification thresholds (mm/day and kWh/m^2/day).
WEATHER_RAIN_THRESHOLD_MM = float(os.environ.get("WEATHER_RAIN_THRESHOLD_MM", "2.0"))
WEATHER_CLOUD_THRESHOLD_KWH = float(os.environ.get("WEATHER_CLOUD_THRESHOLD_KWH", "3.0"))

# -- Optional integrations --------------------------------------------------
NOMINATIM_URL = os.environ.get("NOMINATIM_URL", "https://nominatim.openstreetmap.org")
GOOGLE_CALENDAR_API_KEY = os.environ.get("GOOGLE_CALENDAR_API_KEY") or None
GOOGLE_CALENDAR_URL = os.environ.get(
    "GOOGLE_CALENDAR_URL", "https://www.googleapis.com/calendar/v3/calendars/primary/events"
)

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "loggers": {
        "weatherplan": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": True},
    },
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True
