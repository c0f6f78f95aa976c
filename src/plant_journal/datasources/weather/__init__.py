"""Open-Meteo weather data source.

Fetches historical daily weather from the Open-Meteo archive (free, no API
key) for backfilling journal days.

Public API:
  - historical: fetch_historical_daily (archive API for past dates)
  - summary: summarize_daily (archive response -> journal weather lines)
  - client: API URLs, shared constants
"""

from plant_journal.datasources.weather.client import OPEN_METEO_HISTORICAL
from plant_journal.datasources.weather.historical import fetch_historical_daily
from plant_journal.datasources.weather.summary import summarize_daily

__all__ = [
    "OPEN_METEO_HISTORICAL",
    "fetch_historical_daily",
    "summarize_daily",
]
