"""Unit conversion and condition classification for raw provider values."""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Mapping, Optional

from weatherplan.core.abstractions import Condition

NASA_PARAMETERS = ("T2M", "RH2M", "WS10M", "PRECTOTCORR", "ALLSKY_SFC_SW_DWN", "PS")

# Substituted per field when the provider has no value for the requested day.
NASA_DEFAULTS: Dict[str, float] = {
    "T2M": 20.0,
    "RH2M": 50.0,
    "WS10M": 5.0,
    "PRECTOTCORR": 0.0,
    "ALLSKY_SFC_SW_DWN": 5.0,
    "PS": 101.3,
}

# POWER marks missing samples with this value instead of omitting them.
NASA_FILL_VALUE = -999.0

MS_TO_MPH = 2.237


@dataclass(frozen=True)
class ConditionThresholds:
    """Cut-offs used to classify a day as rainy, cloudy or sunny."""

    rain_mm: float = 2.0
    cloud_kwh: float = 3.0


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def celsius_to_fahrenheit(value: float) -> int:
    return round_half_up(value * 9 / 5 + 32)


def ms_to_mph(value: float) -> int:
    return round_half_up(value * MS_TO_MPH)


def rain_chance_from_precipitation(precipitation_mm: float) -> int:
    """Rough mapping from daily precipitation to a 0-100 chance."""
    return round_half_up(clamp(precipitation_mm * 10, 0, 100))


def classify_condition(
    precipitation_mm: float,
    irradiance_kwh: float,
    thresholds: ConditionThresholds = ConditionThresholds(),
) -> str:
    """Precipitation wins over irradiance; first match decides."""
    if precipitation_mm > thresholds.rain_mm:
        return Condition.RAINY
    if irradiance_kwh < thresholds.cloud_kwh:
        return Condition.CLOUDY
    return Condition.SUNNY


def nasa_date_key(day: date) -> str:
    return day.strftime("%Y%m%d")


def format_date_label(day: date) -> str:
    # e.g. "Thursday, July 4, 2024"
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def _numeric(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number == NASA_FILL_VALUE:
        return None
    return number


def extract_nasa_values(parameters: Mapping[str, Any], day: date) -> Dict[str, Optional[float]]:
    """Pull each known parameter for ``day`` out of ``properties.parameter``.

    Values that are absent, non-numeric or the POWER fill value come back as
    ``None`` so callers can tell "nothing for that day" apart from a default.
    """
    key = nasa_date_key(day)
    values: Dict[str, Optional[float]] = {}
    for name in NASA_PARAMETERS:
        series = parameters.get(name)
        raw = series.get(key) if isinstance(series, Mapping) else None
        values[name] = _numeric(raw)
    return values


def with_nasa_defaults(values: Mapping[str, Optional[float]]) -> Dict[str, float]:
    return {
        name: (values.get(name) if values.get(name) is not None else default)
        for name, default in NASA_DEFAULTS.items()
    }
