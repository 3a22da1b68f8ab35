"""
Salitre Agro - Data models.
Crop catalog entries, daily weather / lunar observations handed to the
recommendation engine, and the recommendation values it derives.
"""
import datetime
from typing import FrozenSet, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

WaterNeed = Literal["low", "medium-low", "medium", "medium-high", "high"]


class Crop(BaseModel):
    """Static catalog entry; never mutated after start-up."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    icon: str
    temp_min: float
    temp_max: float
    # Carried for display; not consulted by the recommendation level
    humidity_min: float
    humidity_max: float
    optimal_lunar_phases: FrozenSet[str]
    water_need: WaterNeed
    description: str


class LunarPhaseObservation(BaseModel):
    date: datetime.date
    phase: str
    illumination: int = Field(ge=0, le=100)
    emoji: str


class WeatherObservation(BaseModel):
    date: datetime.date
    avg_temp_c: float
    min_temp_c: float
    max_temp_c: float
    total_precip_mm: float
    condition: str
    avg_humidity: Optional[float] = None
    sunrise: Optional[str] = None
    sunset: Optional[str] = None
    moonrise: Optional[str] = None
    moonset: Optional[str] = None


class CurrentWeather(BaseModel):
    location_name: str
    region: str
    country: str
    localtime: str
    temp_c: float
    feels_like_c: float
    humidity: float
    precip_mm: float
    wind_kph: float
    wind_dir: str
    pressure_mb: float
    uv: float
    condition: str


class MonthLunarData(BaseModel):
    month: str
    year: int
    days: List[LunarPhaseObservation]


class ActivityRecommendation(BaseModel):
    activity_id: str
    activity: str
    is_recommended: bool
    reason: str
    icon: str


class CropRecommendation(BaseModel):
    crop_id: str
    crop_name: str
    is_recommended: bool
    recommendation_level: int = Field(ge=0, le=100)
    reason: str


class DailyRecommendation(BaseModel):
    date: datetime.date
    lunar_phase: str
    weather_condition: str
    temperature: float
    humidity: float
    precipitation: float
    activities: List[ActivityRecommendation]
    recommended_crops: List[CropRecommendation]


class FieldAdvisory(BaseModel):
    message: str
    kind: Literal["positive", "neutral", "warning"]


class CropConditionStatus(BaseModel):
    status: Literal["optimal", "good", "poor"]
    message: str
