"""
Prefect flow for backfilling journal weather from the Open-Meteo archive.

The i-th archive date maps to journal day ``i + 1 + day_offset``. Whether
the start date is day 1 or day 0 of the grow was never pinned down, so the
offset stays a parameter instead of a guess.

Run locally:
    python -m plant_journal.flows.backfill 2025-10-21 2025-12-06
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from prefect import flow, task

from plant_journal.config import get_settings
from plant_journal.datasources.weather import historical as weather_historical
from plant_journal.datasources.weather.summary import summarize_daily
from plant_journal.schemas import DayRecord
from plant_journal.store import FileJournalStore, JournalStore

# Journal written by the flow
store: JournalStore = FileJournalStore(Path(get_settings().data_file))


def map_to_days(
    lines: list[tuple[str, str]],
    day_offset: int = 0,
    max_day: int | None = None,
) -> dict[int, str]:
    """Assign archive lines to journal days, dropping days outside ``1..max_day``."""
    by_day: dict[int, str] = {}
    for i, (_date, line) in enumerate(lines):
        day = i + 1 + day_offset
        if day < 1 or (max_day is not None and day > max_day):
            continue
        by_day[day] = line
    return by_day


@task(name="fetch-archive-weather", retries=2, retry_delay_seconds=5)
def fetch_archive_weather(
    start_date: str,
    end_date: str,
    lat: float,
    lon: float,
    timezone: str,
) -> dict[str, Any]:
    """Fetch daily weather and hourly humidity for the whole range at once."""
    return weather_historical.fetch_historical_daily(start_date, end_date, lat, lon, timezone)


@task(name="save-backfill")
def save_backfill(weather_by_day: dict[int, str]) -> int:
    """Write every day's weather in one journal update."""
    if not weather_by_day:
        return 0
    store.upsert_days({day: DayRecord(weather=line) for day, line in weather_by_day.items()})
    return len(weather_by_day)


@flow(name="backfill-weather", log_prints=True)
def backfill_weather(
    start_date: str,
    end_date: str,
    lat: float | None = None,
    lon: float | None = None,
    day_offset: int | None = None,
    max_day: int | None = None,
) -> dict[str, Any]:
    """Overwrite ``weather`` on the journal days covered by ``[start_date, end_date]``."""
    settings = get_settings()
    lat = settings.lat if lat is None else lat
    lon = settings.lon if lon is None else lon
    offset = settings.day_offset if day_offset is None else day_offset

    print(f"Fetching Open-Meteo archive for ({lat}, {lon}) {start_date} to {end_date}...")
    data = fetch_archive_weather(start_date, end_date, lat, lon, settings.timezone)
    lines = summarize_daily(data)

    by_day = map_to_days(lines, offset, max_day)
    for i, (date_str, line) in enumerate(lines):
        day = i + 1 + offset
        if day in by_day:
            print(f"Day {day} ({date_str}): {line}")

    updated = save_backfill(by_day)
    print(f"Updated journal with Open-Meteo data for {updated} days.")
    return {"dates": len(lines), "days_updated": updated, "day_offset": offset}


if __name__ == "__main__":
    result = backfill_weather(sys.argv[1], sys.argv[2])
    print(f"Flow complete: {result}")
