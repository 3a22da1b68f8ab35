"""
Salitre Agro - WeatherAPI.com client.
Current conditions, daily forecast and astronomy (moon phase) for the
configured location, parsed into observation models. Single best-effort
request per call; no retries.
"""
import calendar
import datetime
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Tuple

import requests
from pydantic import ValidationError

from lunar import normalize_phase, phase_emoji
from models import CurrentWeather, LunarPhaseObservation, MonthLunarData, WeatherObservation

logger = logging.getLogger(__name__)

MONTH_NAMES_ES = [
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
]

MAX_FORECAST_DAYS = 14


class WeatherServiceError(Exception):
    """The weather/astronomy provider could not deliver usable data."""


# --- Payload parsing ---

def _illumination(value: Any) -> int:
    return max(0, min(100, int(round(float(value)))))


def parse_astro(day: datetime.date, astro: Dict[str, Any]) -> LunarPhaseObservation:
    """Lunar observation from an ``astro`` block (forecast day or astronomy.json)."""
    phase = normalize_phase(astro["moon_phase"])
    return LunarPhaseObservation(
        date=day,
        phase=phase,
        illumination=_illumination(astro["moon_illumination"]),
        emoji=phase_emoji(phase),
    )


def parse_forecast_day(item: Dict[str, Any]) -> Tuple[WeatherObservation, LunarPhaseObservation]:
    """One ``forecast.forecastday`` entry -> (weather, lunar) observations."""
    day_date = datetime.date.fromisoformat(item["date"])
    day = item["day"]
    astro = item.get("astro", {})
    weather = WeatherObservation(
        date=day_date,
        avg_temp_c=day["avgtemp_c"],
        min_temp_c=day["mintemp_c"],
        max_temp_c=day["maxtemp_c"],
        total_precip_mm=day["totalprecip_mm"],
        condition=day["condition"]["text"],
        avg_humidity=day.get("avghumidity"),
        sunrise=astro.get("sunrise"),
        sunset=astro.get("sunset"),
        moonrise=astro.get("moonrise"),
        moonset=astro.get("moonset"),
    )
    return weather, parse_astro(day_date, astro)


def parse_current(data: Dict[str, Any]) -> CurrentWeather:
    current = data["current"]
    location = data.get("location", {})
    return CurrentWeather(
        location_name=location.get("name", "Unknown"),
        region=location.get("region", ""),
        country=location.get("country", ""),
        localtime=location.get("localtime", ""),
        temp_c=current["temp_c"],
        feels_like_c=current.get("feelslike_c", current["temp_c"]),
        humidity=current["humidity"],
        precip_mm=current.get("precip_mm", 0.0),
        wind_kph=current.get("wind_kph", 0.0),
        wind_dir=current.get("wind_dir", ""),
        pressure_mb=current.get("pressure_mb", 0.0),
        uv=current.get("uv", 0.0),
        condition=current["condition"]["text"],
    )


# --- Client ---

class WeatherClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.weatherapi.com/v1",
        location: str = "Salitre, Ecuador",
        timeout: float = 10.0,
        max_workers: int = 4,
        lang: Optional[str] = "es",
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.location = location
        self.timeout = timeout
        self.max_workers = max(1, max_workers)
        self.lang = lang

    @classmethod
    def from_config(cls, config) -> "WeatherClient":
        return cls(
            api_key=config.WEATHER_API_KEY,
            base_url=config.WEATHER_API_BASE_URL,
            location=config.WEATHER_LOCATION,
            timeout=config.WEATHER_TIMEOUT,
            max_workers=config.LUNAR_FETCH_WORKERS,
        )

    def _get(self, endpoint: str, **params) -> Dict[str, Any]:
        if not self.api_key:
            raise WeatherServiceError("Weather API key not configured")
        query = {"key": self.api_key, "q": self.location, **params}
        if self.lang:
            query["lang"] = self.lang
        url = f"{self.base_url}/{endpoint}"
        logger.debug(f"GET {url} q={self.location} {params}")
        try:
            response = requests.get(url, params=query, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise WeatherServiceError(f"Weather API request timed out ({endpoint})") from e
        except requests.exceptions.RequestException as e:
            raise WeatherServiceError(f"Failed to fetch {endpoint}: {e}") from e

        if response.status_code != 200:
            try:
                message = response.json().get("error", {}).get("message")
            except (ValueError, AttributeError):
                message = None
            raise WeatherServiceError(
                f"Weather API error: {message or f'HTTP {response.status_code}'}"
            )
        try:
            return response.json()
        except ValueError as e:
            raise WeatherServiceError(f"Weather API returned invalid JSON ({endpoint})") from e

    def current(self) -> CurrentWeather:
        data = self._get("current.json", aqi="no")
        try:
            return parse_current(data)
        except (KeyError, TypeError, ValidationError) as e:
            raise WeatherServiceError(f"Malformed current weather payload: {e}") from e

    def forecast(self, days: int = 7) -> List[Tuple[WeatherObservation, LunarPhaseObservation]]:
        """Daily forecast with the lunar observation for each day."""
        if not 1 <= days <= MAX_FORECAST_DAYS:
            raise ValueError(f"days must be between 1 and {MAX_FORECAST_DAYS}")
        data = self._get("forecast.json", days=days, aqi="no", alerts="no")
        try:
            return [parse_forecast_day(item) for item in data["forecast"]["forecastday"]]
        except (KeyError, TypeError, ValueError) as e:
            raise WeatherServiceError(f"Malformed forecast payload: {e}") from e

    def lunar_phase(self, day: Optional[datetime.date] = None) -> LunarPhaseObservation:
        day = day or datetime.date.today()
        data = self._get("astronomy.json", dt=day.isoformat())
        try:
            return parse_astro(day, data["astronomy"]["astro"])
        except (KeyError, TypeError, ValueError) as e:
            raise WeatherServiceError(f"Malformed astronomy payload for {day}: {e}") from e

    def month_lunar_data(self, month: int, year: int) -> MonthLunarData:
        """
        Lunar observation for every day of a month.
        One astronomy request per day, at most ``max_workers`` in flight;
        any failed day fails the month.
        """
        if not 1 <= month <= 12:
            raise ValueError("month must be between 1 and 12")
        days_in_month = calendar.monthrange(year, month)[1]
        dates = [datetime.date(year, month, d) for d in range(1, days_in_month + 1)]
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            days = list(executor.map(self.lunar_phase, dates))
        return MonthLunarData(month=MONTH_NAMES_ES[month - 1], year=year, days=days)
