"""
Salitre Agro - Lunar agricultural calendar for the Salitre farming community.
FastAPI backend: crop catalog, current weather and forecast, lunar phases,
daily activity / crop recommendations and the monthly lunar calendar.
"""
import datetime
import logging
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from advisory import crop_condition_status, field_advisory, level_band
from config import Config
from crop_database import CROP_DATABASE, calculate_recommendation_level, get_crop
from lunar import PHASES, spanish_name
from models import (
    Crop,
    CropConditionStatus,
    CurrentWeather,
    DailyRecommendation,
    FieldAdvisory,
    LunarPhaseObservation,
    MonthLunarData,
    WeatherObservation,
)
from recommendation_engine import build_daily_recommendation, build_month_calendar
from weather_client import MAX_FORECAST_DAYS, WeatherClient, WeatherServiceError

logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Salitre Agro API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

LOAD_ERROR_MESSAGE = "Error al cargar los datos. Por favor, intente de nuevo más tarde."
WEATHER_ERROR_MESSAGE = "Error al cargar los datos del clima. Por favor, intente de nuevo más tarde."


def get_weather_client() -> WeatherClient:
    return WeatherClient.from_config(Config)


def _upstream_failure(error: WeatherServiceError, message: str = LOAD_ERROR_MESSAGE) -> HTTPException:
    logger.error(f"Weather provider failure: {error}")
    return HTTPException(status_code=502, detail=message)


# --- Response models ---
class CropInfo(BaseModel):
    id: str
    name: str
    icon: str
    temp_min: float
    temp_max: float
    humidity_min: float
    humidity_max: float
    optimal_lunar_phases: List[str]
    optimal_lunar_phase_names: List[str]
    water_need: str
    description: str


class CropToday(BaseModel):
    date: datetime.date
    lunar_phase: str
    temperature: float
    current_temperature: float
    precipitation: float
    condition: CropConditionStatus
    recommendation_level: int
    level_band: str


class CropDetailResponse(BaseModel):
    crop: CropInfo
    today: Optional[CropToday] = None


class WeatherResponse(BaseModel):
    current: CurrentWeather
    advisory: FieldAdvisory


class ForecastDay(BaseModel):
    weather: WeatherObservation
    lunar: LunarPhaseObservation


class LunarPhaseResponse(LunarPhaseObservation):
    display_name: str


class CalendarResponse(BaseModel):
    month: str
    year: int
    days: List[DailyRecommendation]


def _crop_info(crop: Crop) -> CropInfo:
    """Catalog entry with phases listed in lunar-cycle order."""
    phases = [p for p in PHASES if p in crop.optimal_lunar_phases]
    phases += sorted(p for p in crop.optimal_lunar_phases if p not in PHASES)
    return CropInfo(
        **crop.model_dump(exclude={"optimal_lunar_phases"}),
        optimal_lunar_phases=phases,
        optimal_lunar_phase_names=[spanish_name(p) for p in phases],
    )


def _month_or_current(month: Optional[int], year: Optional[int]):
    today = datetime.date.today()
    return (month if month is not None else today.month, year if year is not None else today.year)


@app.get("/crops", response_model=List[CropInfo])
def list_crops():
    """Full crop catalog in display order."""
    return [_crop_info(crop) for crop in CROP_DATABASE]


@app.get("/crops/{crop_id}", response_model=CropDetailResponse)
def crop_detail(crop_id: str, client: WeatherClient = Depends(get_weather_client)):
    """Crop characteristics plus today's growing conditions when weather is reachable."""
    crop = get_crop(crop_id)
    if crop is None:
        raise HTTPException(status_code=404, detail="Cultivo no encontrado")

    today = None
    try:
        current = client.current()
        # first forecast day is today in Salitre local time
        forecast = client.forecast(1)
    except WeatherServiceError as e:
        logger.warning(f"Crop detail for {crop_id} without live conditions: {e}")
        forecast = []
    if forecast:
        weather, lunar = forecast[0]
        humidity = weather.avg_humidity if weather.avg_humidity is not None else Config.DEFAULT_HUMIDITY
        level = calculate_recommendation_level(
            crop, lunar.phase, weather.avg_temp_c, humidity, weather.total_precip_mm
        )
        today = CropToday(
            date=weather.date,
            lunar_phase=lunar.phase,
            temperature=weather.avg_temp_c,
            current_temperature=current.temp_c,
            precipitation=weather.total_precip_mm,
            condition=crop_condition_status(crop, current.temp_c, lunar.phase),
            recommendation_level=level,
            level_band=level_band(level),
        )
    return CropDetailResponse(crop=_crop_info(crop), today=today)


@app.get("/weather", response_model=WeatherResponse)
def get_weather(client: WeatherClient = Depends(get_weather_client)):
    """Current weather at the configured location with field-work advice."""
    try:
        current = client.current()
    except WeatherServiceError as e:
        raise _upstream_failure(e, WEATHER_ERROR_MESSAGE)
    return WeatherResponse(current=current, advisory=field_advisory(current))


@app.get("/forecast", response_model=List[ForecastDay])
def get_forecast(
    days: int = Query(Config.FORECAST_DAYS, ge=1, le=MAX_FORECAST_DAYS, description="Forecast days"),
    client: WeatherClient = Depends(get_weather_client),
):
    """Daily forecast with the moon phase of each day."""
    try:
        forecast = client.forecast(days)
    except WeatherServiceError as e:
        raise _upstream_failure(e, WEATHER_ERROR_MESSAGE)
    return [ForecastDay(weather=weather, lunar=lunar) for weather, lunar in forecast]


@app.get("/lunar-phase", response_model=LunarPhaseResponse)
def get_lunar_phase(
    date: Optional[datetime.date] = Query(None, description="Date (YYYY-MM-DD), default today"),
    client: WeatherClient = Depends(get_weather_client),
):
    try:
        observation = client.lunar_phase(date or datetime.date.today())
    except WeatherServiceError as e:
        raise _upstream_failure(e)
    return LunarPhaseResponse(**observation.model_dump(), display_name=spanish_name(observation.phase))


@app.get("/lunar-calendar", response_model=MonthLunarData)
def get_lunar_calendar(
    month: Optional[int] = Query(None, ge=1, le=12, description="Month 1-12, default current"),
    year: Optional[int] = Query(None, ge=1900, le=2100, description="Year, default current"),
    client: WeatherClient = Depends(get_weather_client),
):
    """Moon phase for every day of a month."""
    month, year = _month_or_current(month, year)
    try:
        return client.month_lunar_data(month, year)
    except WeatherServiceError as e:
        raise _upstream_failure(e)


@app.get("/recommendations", response_model=List[DailyRecommendation])
def get_recommendations(
    days: int = Query(Config.FORECAST_DAYS, ge=1, le=MAX_FORECAST_DAYS, description="Forecast days"),
    client: WeatherClient = Depends(get_weather_client),
):
    """Activity and crop recommendations for each forecast day."""
    try:
        forecast = client.forecast(days)
    except WeatherServiceError as e:
        raise _upstream_failure(e)
    return [
        build_daily_recommendation(lunar, weather, Config.DEFAULT_HUMIDITY)
        for weather, lunar in forecast
    ]


@app.get("/recommendations/calendar", response_model=CalendarResponse)
def get_recommendation_calendar(
    month: Optional[int] = Query(None, ge=1, le=12, description="Month 1-12, default current"),
    year: Optional[int] = Query(None, ge=1900, le=2100, description="Year, default current"),
    client: WeatherClient = Depends(get_weather_client),
):
    """
    Recommendations for every day of a month. Days inside the forecast window
    use the forecast; the rest use typical Salitre weather.
    """
    month, year = _month_or_current(month, year)
    try:
        lunar_month = client.month_lunar_data(month, year)
        forecast = client.forecast(Config.FORECAST_DAYS)
    except WeatherServiceError as e:
        raise _upstream_failure(e)
    calendar = build_month_calendar(
        lunar_month.days,
        [weather for weather, _ in forecast],
        Config.DEFAULT_HUMIDITY,
    )
    return CalendarResponse(month=lunar_month.month, year=lunar_month.year, days=list(calendar.values()))


@app.get("/health")
def health():
    return {
        "status": "active",
        "version": "1.0.0",
        "location": Config.WEATHER_LOCATION,
        "weather_api_configured": bool(Config.WEATHER_API_KEY),
        "features": [
            "crops",
            "weather",
            "forecast",
            "lunar_phase",
            "lunar_calendar",
            "daily_recommendations",
            "recommendation_calendar",
        ],
    }
