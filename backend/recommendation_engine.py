"""
Salitre Agro - Daily recommendation builder.
Combines one day's lunar and weather observations into the activity list and
the ranked crop list, and assembles a whole month for the lunar calendar.
"""
import datetime
import logging
from typing import Dict, Iterable, List, Optional

from activity_rules import evaluate_activities
from crop_database import (
    CROP_DATABASE,
    calculate_recommendation_level,
    crop_recommendation_reason,
    is_recommended_level,
)
from models import (
    Crop,
    CropRecommendation,
    DailyRecommendation,
    LunarPhaseObservation,
    WeatherObservation,
)

logger = logging.getLogger(__name__)

DEFAULT_HUMIDITY = 70.0

# Typical Salitre day, used for calendar days beyond the forecast window
FALLBACK_AVG_TEMP_C = 28.0
FALLBACK_MIN_TEMP_C = 24.0
FALLBACK_MAX_TEMP_C = 32.0
FALLBACK_PRECIP_MM = 0.0
FALLBACK_CONDITION = "Sin datos"


def recommend_crops(
    lunar_phase: str,
    temperature: float,
    humidity: float,
    precipitation: float,
    crops: Iterable[Crop] = CROP_DATABASE,
) -> List[CropRecommendation]:
    """Score every crop and sort by level, highest first (stable on ties)."""
    scored = []
    for crop in crops:
        level = calculate_recommendation_level(crop, lunar_phase, temperature, humidity, precipitation)
        scored.append(CropRecommendation(
            crop_id=crop.id,
            crop_name=crop.name,
            is_recommended=is_recommended_level(level),
            recommendation_level=level,
            reason=crop_recommendation_reason(crop, lunar_phase, temperature, precipitation),
        ))
    scored.sort(key=lambda c: c.recommendation_level, reverse=True)
    return scored


def build_daily_recommendation(
    lunar: LunarPhaseObservation,
    weather: WeatherObservation,
    default_humidity: float = DEFAULT_HUMIDITY,
) -> DailyRecommendation:
    """
    Recommendation bundle for one calendar day.

    Humidity is the provider's daily average when present, otherwise
    ``default_humidity``. It is reported but does not change any level.
    """
    if lunar.date != weather.date:
        logger.debug(f"Lunar date {lunar.date} differs from weather date {weather.date}")

    temperature = weather.avg_temp_c
    precipitation = weather.total_precip_mm
    humidity = weather.avg_humidity if weather.avg_humidity is not None else default_humidity

    return DailyRecommendation(
        date=weather.date,
        lunar_phase=lunar.phase,
        weather_condition=weather.condition,
        temperature=temperature,
        humidity=humidity,
        precipitation=precipitation,
        activities=evaluate_activities(lunar.phase, temperature, precipitation),
        recommended_crops=recommend_crops(lunar.phase, temperature, humidity, precipitation),
    )


def fallback_observation(day: datetime.date) -> WeatherObservation:
    """Climate-normal stand-in for a day with no forecast."""
    return WeatherObservation(
        date=day,
        avg_temp_c=FALLBACK_AVG_TEMP_C,
        min_temp_c=FALLBACK_MIN_TEMP_C,
        max_temp_c=FALLBACK_MAX_TEMP_C,
        total_precip_mm=FALLBACK_PRECIP_MM,
        condition=FALLBACK_CONDITION,
    )


def build_month_calendar(
    lunar_days: List[LunarPhaseObservation],
    forecast_days: Optional[List[WeatherObservation]] = None,
    default_humidity: float = DEFAULT_HUMIDITY,
) -> Dict[datetime.date, DailyRecommendation]:
    """
    Recommendations for every lunar day, keyed and ordered by date.
    Days covered by the forecast use it; the rest use the fallback climate.
    """
    forecast_by_date = {w.date: w for w in (forecast_days or [])}
    calendar: Dict[datetime.date, DailyRecommendation] = {}
    for lunar in sorted(lunar_days, key=lambda d: d.date):
        weather = forecast_by_date.get(lunar.date) or fallback_observation(lunar.date)
        calendar[lunar.date] = build_daily_recommendation(lunar, weather, default_humidity)
    forecast_hits = sum(1 for d in calendar if d in forecast_by_date)
    logger.debug(f"Built calendar for {len(calendar)} days ({forecast_hits} with forecast)")
    return calendar
