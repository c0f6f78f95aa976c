"""Open-Meteo API client constants and shared configuration.

API docs:
  - Archive: https://open-meteo.com/en/docs/historical-weather-api
"""

OPEN_METEO_HISTORICAL = "https://archive-api.open-meteo.com/v1/archive"

# Daily variables we request from Open-Meteo
DAILY_VARS = [
    "temperature_2m_max",
    "temperature_2m_min",
    "sunrise",
    "sunset",
    "daylight_duration",
]

# Humidity only exists hourly; daily values are averaged from these
HOURLY_VARS = ["relative_humidity_2m"]

TEMPERATURE_UNIT = "fahrenheit"
