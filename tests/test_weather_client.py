"""Tests for weather_client.py: payload parsing and provider error mapping."""

import datetime
import threading
import time
from unittest.mock import MagicMock, patch

import pytest
import requests

from lunar import FIRST_QUARTER, WAXING_CRESCENT
from weather_client import (
    WeatherClient,
    WeatherServiceError,
    parse_astro,
    parse_forecast_day,
)

FORECAST_DAY = {
    "date": "2025-05-24",
    "day": {
        "maxtemp_c": 31.2,
        "mintemp_c": 22.8,
        "avgtemp_c": 26.4,
        "totalprecip_mm": 3.1,
        "avghumidity": 78,
        "condition": {"text": "Lluvia ligera", "icon": "", "code": 1183},
    },
    "astro": {
        "sunrise": "06:10 AM",
        "sunset": "06:20 PM",
        "moonrise": "03:12 AM",
        "moonset": "03:40 PM",
        "moon_phase": "Waxing Crescent",
        "moon_illumination": "12",
    },
}

CURRENT = {
    "location": {"name": "Salitre", "region": "Guayas", "country": "Ecuador", "localtime": "2025-05-24 10:00"},
    "current": {
        "temp_c": 27.0, "feelslike_c": 30.1, "humidity": 74, "precip_mm": 0.1,
        "wind_kph": 9.4, "wind_dir": "SW", "pressure_mb": 1011.0, "uv": 8.0,
        "condition": {"text": "Parcialmente nublado"},
    },
}


def _response(status=200, payload=None):
    response = MagicMock()
    response.status_code = status
    response.json.return_value = payload if payload is not None else {}
    return response


@pytest.fixture
def client():
    return WeatherClient(api_key="abc", base_url="https://example.test/v1/", timeout=3, max_workers=3)


# ── Parsing ──

class TestParsing:
    def test_forecast_day(self):
        weather, lunar = parse_forecast_day(FORECAST_DAY)
        assert weather.date == datetime.date(2025, 5, 24)
        assert weather.avg_temp_c == 26.4
        assert weather.total_precip_mm == 3.1
        assert weather.avg_humidity == 78
        assert weather.condition == "Lluvia ligera"
        assert weather.sunrise == "06:10 AM"
        assert lunar.phase == WAXING_CRESCENT
        assert lunar.illumination == 12
        assert lunar.emoji == "🌒"

    def test_astro_case_insensitive(self):
        obs = parse_astro(datetime.date(2025, 5, 27), {"moon_phase": "FIRST QUARTER", "moon_illumination": 51})
        assert obs.phase == FIRST_QUARTER
        assert obs.illumination == 51

    def test_missing_field(self):
        with pytest.raises(KeyError):
            parse_forecast_day({"date": "2025-05-24", "day": {}})


# ── Client ──

class TestWeatherClient:
    def test_current(self, client):
        with patch("weather_client.requests.get", return_value=_response(payload=CURRENT)) as get:
            current = client.current()
        assert current.location_name == "Salitre"
        assert current.temp_c == 27.0
        assert current.condition == "Parcialmente nublado"
        url = get.call_args[0][0]
        params = get.call_args[1]["params"]
        assert url == "https://example.test/v1/current.json"
        assert params["key"] == "abc"
        assert params["q"] == "Salitre, Ecuador"
        assert get.call_args[1]["timeout"] == 3

    def test_forecast(self, client):
        payload = {"forecast": {"forecastday": [FORECAST_DAY]}}
        with patch("weather_client.requests.get", return_value=_response(payload=payload)) as get:
            days = client.forecast(3)
        assert len(days) == 1
        assert get.call_args[1]["params"]["days"] == 3

    def test_forecast_days_range(self, client):
        with pytest.raises(ValueError):
            client.forecast(0)

    def test_lunar_phase(self, client):
        payload = {"astronomy": {"astro": {"moon_phase": "Full Moon", "moon_illumination": "99"}}}
        with patch("weather_client.requests.get", return_value=_response(payload=payload)) as get:
            obs = client.lunar_phase(datetime.date(2025, 6, 11))
        assert obs.phase == "Full Moon"
        assert obs.date == datetime.date(2025, 6, 11)
        assert get.call_args[1]["params"]["dt"] == "2025-06-11"

    def test_month_lunar_data_in_date_order(self, client):
        def fake_get(url, params=None, timeout=None):
            day = int(params["dt"][-2:])
            phase = "Waxing Crescent" if day % 2 else "Waning Gibbous"
            return _response(payload={"astronomy": {"astro": {"moon_phase": phase, "moon_illumination": day}}})

        with patch("weather_client.requests.get", side_effect=fake_get):
            month = client.month_lunar_data(2, 2024)
        assert month.month == "febrero"
        assert month.year == 2024
        assert [d.date.day for d in month.days] == list(range(1, 30))
        assert month.days[0].phase == WAXING_CRESCENT
        assert month.days[1].illumination == 2

    def test_month_lunar_data_bounded_concurrency(self, client):
        lock = threading.Lock()
        in_flight = 0
        peak = 0

        def fake_get(url, params=None, timeout=None):
            nonlocal in_flight, peak
            with lock:
                in_flight += 1
                peak = max(peak, in_flight)
            time.sleep(0.02)
            with lock:
                in_flight -= 1
            return _response(payload={"astronomy": {"astro": {"moon_phase": "New Moon", "moon_illumination": 0}}})

        with patch("weather_client.requests.get", side_effect=fake_get):
            month = client.month_lunar_data(5, 2025)
        assert len(month.days) == 31
        assert 1 < peak <= client.max_workers

    def test_month_fails_if_any_day_fails(self, client):
        def fake_get(url, params=None, timeout=None):
            if params["dt"].endswith("-15"):
                raise requests.exceptions.ConnectionError("boom")
            return _response(payload={"astronomy": {"astro": {"moon_phase": "New Moon", "moon_illumination": 0}}})

        with patch("weather_client.requests.get", side_effect=fake_get):
            with pytest.raises(WeatherServiceError):
                client.month_lunar_data(5, 2025)

    def test_api_error_message(self, client):
        error = _response(status=401, payload={"error": {"code": 2006, "message": "API key is invalid."}})
        with patch("weather_client.requests.get", return_value=error):
            with pytest.raises(WeatherServiceError, match="API key is invalid"):
                client.current()

    def test_timeout(self, client):
        with patch("weather_client.requests.get", side_effect=requests.exceptions.Timeout()):
            with pytest.raises(WeatherServiceError, match="timed out"):
                client.forecast(7)

    def test_malformed_payload(self, client):
        with patch("weather_client.requests.get", return_value=_response(payload={"forecast": {}})):
            with pytest.raises(WeatherServiceError, match="Malformed"):
                client.forecast(7)

    def test_missing_api_key(self):
        client = WeatherClient(api_key="")
        with patch("weather_client.requests.get") as get:
            with pytest.raises(WeatherServiceError, match="not configured"):
                client.current()
        get.assert_not_called()

    def test_from_config(self):
        class Cfg:
            WEATHER_API_KEY = "k"
            WEATHER_API_BASE_URL = "https://api.weatherapi.com/v1"
            WEATHER_LOCATION = "Salitre, Ecuador"
            WEATHER_TIMEOUT = 5.0
            LUNAR_FETCH_WORKERS = 0

        client = WeatherClient.from_config(Cfg)
        assert client.api_key == "k"
        assert client.timeout == 5.0
        assert client.max_workers == 1
