"""Format archive weather into the journal's one-line daily summary.

The line matches what the live weather lookup writes::

    High 68°F, Low 52°F, Humidity 71%, Sunrise 7:15 AM, Sunset 6:20 PM, Daylight 11 hours 5 minutes
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

UNKNOWN = "?"


def format_clock(iso: str | None) -> str:
    """``2025-10-22T07:15`` -> ``7:15 AM``."""
    if not iso:
        return UNKNOWN
    try:
        moment = datetime.fromisoformat(iso)
    except ValueError:
        return UNKNOWN
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{moment.hour % 12 or 12}:{moment.minute:02d} {suffix}"


def format_daylight(seconds: float | None) -> str:
    if seconds is None:
        return UNKNOWN
    total = int(seconds)
    return f"{total // 3600} hours {(total % 3600) // 60} minutes"


def daily_humidity(hourly: dict[str, Any]) -> dict[str, int]:
    """Mean relative humidity per date (YYYY-MM-DD), rounded."""
    sums: dict[str, list[float]] = {}
    times = hourly.get("time", [])
    values = hourly.get("relative_humidity_2m", [])
    for stamp, value in zip(times, values, strict=False):
        if value is None:
            continue
        sums.setdefault(stamp[:10], []).append(value)
    return {day: round(sum(vals) / len(vals)) for day, vals in sums.items()}


def _temp(value: float | None) -> str:
    return UNKNOWN if value is None else str(round(value))


def summarize_daily(data: dict[str, Any]) -> list[tuple[str, str]]:
    """
    One summary line per archive date.

    Returns:
        ``(date, line)`` pairs in the order the archive returned them.
    """
    daily = data.get("daily", {})
    humidity = daily_humidity(data.get("hourly", {}))
    dates: list[str] = daily.get("time", [])

    def column(name: str) -> list[Any]:
        values = daily.get(name) or []
        return list(values) + [None] * (len(dates) - len(values))

    highs = column("temperature_2m_max")
    lows = column("temperature_2m_min")
    sunrises = column("sunrise")
    sunsets = column("sunset")
    daylight = column("daylight_duration")

    lines: list[tuple[str, str]] = []
    for i, date_str in enumerate(dates):
        hum = humidity.get(date_str)
        line = (
            f"High {_temp(highs[i])}°F, Low {_temp(lows[i])}°F, "
            f"Humidity {UNKNOWN if hum is None else hum}%, "
            f"Sunrise {format_clock(sunrises[i])}, Sunset {format_clock(sunsets[i])}, "
            f"Daylight {format_daylight(daylight[i])}"
        )
        lines.append((date_str, line))
    return lines
