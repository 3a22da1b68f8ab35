"""
Pytest configuration and shared fixtures for Salitre Agro tests.
"""

import datetime
import os
import sys

import pytest

# Backend modules are imported by bare name, as the app does
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "backend"))

# Set test environment variables before importing config
os.environ.setdefault("WEATHER_API_KEY", "test-key-not-real")
os.environ.setdefault("WEATHER_LOCATION", "Salitre, Ecuador")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from lunar import FIRST_QUARTER, FULL_MOON, WAXING_CRESCENT, phase_emoji  # noqa: E402
from models import (  # noqa: E402
    CurrentWeather,
    LunarPhaseObservation,
    MonthLunarData,
    WeatherObservation,
)
from weather_client import WeatherServiceError  # noqa: E402

DAY = datetime.date(2025, 5, 24)


def make_lunar(day=DAY, phase=WAXING_CRESCENT, illumination=25):
    return LunarPhaseObservation(date=day, phase=phase, illumination=illumination, emoji=phase_emoji(phase))


def make_weather(day=DAY, avg=27.0, precip=6.0, condition="Parcialmente nublado", humidity=None):
    return WeatherObservation(
        date=day,
        avg_temp_c=avg,
        min_temp_c=avg - 4,
        max_temp_c=avg + 4,
        total_precip_mm=precip,
        condition=condition,
        avg_humidity=humidity,
    )


def make_current(**overrides):
    values = dict(
        location_name="Salitre",
        region="Guayas",
        country="Ecuador",
        localtime="2025-05-24 10:00",
        temp_c=27.0,
        feels_like_c=29.0,
        humidity=70.0,
        precip_mm=0.0,
        wind_kph=10.0,
        wind_dir="SW",
        pressure_mb=1010.0,
        uv=7.0,
        condition="Parcialmente nublado",
    )
    values.update(overrides)
    return CurrentWeather(**values)


class FakeWeatherClient:
    """In-memory stand-in for WeatherClient."""

    def __init__(self, current=None, forecast_days=None, phase=WAXING_CRESCENT):
        self._current = current or make_current()
        self._forecast = forecast_days if forecast_days is not None else [
            (make_weather(DAY, precip=6.0), make_lunar(DAY, WAXING_CRESCENT)),
            (make_weather(DAY + datetime.timedelta(days=1), precip=0.0), make_lunar(DAY + datetime.timedelta(days=1), FIRST_QUARTER, 50)),
        ]
        self._phase = phase
        self.calls = []

    def current(self):
        self.calls.append("current")
        return self._current

    def forecast(self, days=7):
        self.calls.append(("forecast", days))
        return self._forecast[:days]

    def lunar_phase(self, day=None):
        self.calls.append(("lunar_phase", day))
        return make_lunar(day or DAY, self._phase)

    def month_lunar_data(self, month, year):
        self.calls.append(("month_lunar_data", month, year))
        days = [make_lunar(datetime.date(year, month, d), FULL_MOON, 100) for d in range(1, 4)]
        return MonthLunarData(month="mayo", year=year, days=days)


class FailingWeatherClient:
    def _fail(self, *args, **kwargs):
        raise WeatherServiceError("Weather API error: API key is invalid.")

    current = forecast = lunar_phase = month_lunar_data = _fail


@pytest.fixture
def fake_client():
    return FakeWeatherClient()


@pytest.fixture
def failing_client():
    return FailingWeatherClient()


@pytest.fixture
def current_weather():
    return make_current


@pytest.fixture
def rice():
    from crop_database import get_crop
    return get_crop("arroz")
