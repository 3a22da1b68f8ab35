"""
Salitre Agro - Runtime configuration.
Values come from the environment (optionally a local .env file); nothing here
is a secret baked into the code.
"""
import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _bounded(value: int, low: int, high: int) -> int:
    return min(max(value, low), high)


class Config:
    # Weather / astronomy provider (WeatherAPI.com)
    WEATHER_API_KEY = os.getenv("WEATHER_API_KEY", "")
    WEATHER_API_BASE_URL = os.getenv("WEATHER_API_BASE_URL", "https://api.weatherapi.com/v1")
    WEATHER_LOCATION = os.getenv("WEATHER_LOCATION", "Salitre, Ecuador")
    WEATHER_TIMEOUT = float(os.getenv("WEATHER_TIMEOUT", "10"))

    # Forecast window used for daily recommendations and the month calendar (provider max 14)
    FORECAST_DAYS = _bounded(int(os.getenv("FORECAST_DAYS", "7")), 1, 14)

    # Parallel astronomy requests when loading a whole month
    LUNAR_FETCH_WORKERS = int(os.getenv("LUNAR_FETCH_WORKERS", "4"))

    # Placeholder when the provider does not report a daily average humidity
    DEFAULT_HUMIDITY = float(os.getenv("DEFAULT_HUMIDITY", "70"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    CORS_ORIGINS = _csv(os.getenv("CORS_ORIGINS", "*"))
