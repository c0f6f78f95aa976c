"""Historical daily weather from Open-Meteo Archive API."""

from __future__ import annotations

from typing import Any

from plant_journal.datasources.weather.client import (
    DAILY_VARS,
    HOURLY_VARS,
    OPEN_METEO_HISTORICAL,
    TEMPERATURE_UNIT,
)
from plant_journal.services.http import session


def fetch_historical_daily(
    start_date: str,
    end_date: str,
    lat: float = 37.7749,
    lon: float = -122.4194,
    timezone: str = "America/Los_Angeles",
) -> dict[str, Any]:
    """
    Fetch historical daily weather from Open-Meteo Archive API.

    Args:
        start_date: ISO date string (YYYY-MM-DD).
        end_date: ISO date string (YYYY-MM-DD).
        lat: Latitude (default: San Francisco, CA).
        lon: Longitude.
        timezone: IANA zone used for day boundaries and sunrise/sunset times.

    Returns:
        Raw API response dict with ``daily`` and ``hourly`` keys containing arrays.
    """
    params: dict[str, Any] = {
        "latitude": lat,
        "longitude": lon,
        "start_date": start_date,
        "end_date": end_date,
        "daily": DAILY_VARS,
        "hourly": HOURLY_VARS,
        "temperature_unit": TEMPERATURE_UNIT,
        "timezone": timezone,
    }
    resp = session.get(OPEN_METEO_HISTORICAL, params=params)
    resp.raise_for_status()
    result: dict[str, Any] = resp.json()
    return result
