"""
Salitre Agro - Crop catalog and suitability scoring.
Crops grown around Salitre (Guayas, Ecuador) with their optimal temperature,
humidity, lunar phases and water needs, plus the 0-100 recommendation level
computed from a day's lunar phase, temperature and precipitation.
"""

from typing import Callable, Dict, List, Optional

from lunar import FIRST_QUARTER, FULL_MOON, PHASES, WAXING_CRESCENT, spanish_name
from models import Crop

# --- Crop Database ---
# Catalog order is the tie-break order for equal recommendation levels.

CROP_DATABASE: List[Crop] = [
    Crop(
        id="arroz",
        name="Arroz",
        icon="🌾",
        temp_min=22, temp_max=32,
        humidity_min=60, humidity_max=85,
        optimal_lunar_phases=frozenset({WAXING_CRESCENT}),
        water_need="high",
        description="Cereal básico en la alimentación ecuatoriana. En Salitre se cultiva principalmente en tierras bajas inundables.",
    ),
    Crop(
        id="banano",
        name="Banano",
        icon="🍌",
        temp_min=20, temp_max=35,
        humidity_min=70, humidity_max=90,
        optimal_lunar_phases=frozenset({WAXING_CRESCENT, FIRST_QUARTER}),
        water_need="medium-high",
        description="Fruta tropical de gran importancia económica. Requiere suelos bien drenados y ricos en nutrientes.",
    ),
    Crop(
        id="cacao",
        name="Cacao",
        icon="🍫",
        temp_min=18, temp_max=32,
        humidity_min=70, humidity_max=100,
        optimal_lunar_phases=frozenset({FULL_MOON, FIRST_QUARTER}),
        water_need="medium",
        description="El cacao fino de aroma ecuatoriano es reconocido mundialmente. Prefiere sombra parcial y suelos fértiles.",
    ),
    Crop(
        id="sandia",
        name="Sandía",
        icon="🍉",
        temp_min=23, temp_max=35,
        humidity_min=65, humidity_max=75,
        optimal_lunar_phases=frozenset({WAXING_CRESCENT}),
        water_need="medium",
        description="Fruta refrescante que crece bien en climas cálidos. Necesita espacio para expandirse y suelos bien drenados.",
    ),
    Crop(
        id="soya",
        name="Soya",
        icon="🫘",
        temp_min=20, temp_max=30,
        humidity_min=60, humidity_max=80,
        optimal_lunar_phases=frozenset({WAXING_CRESCENT, FIRST_QUARTER}),
        water_need="medium-low",
        description="Leguminosa rica en proteínas. Mejora la calidad del suelo fijando nitrógeno.",
    ),
    Crop(
        id="mango",
        name="Mango",
        icon="🥭",
        temp_min=24, temp_max=35,
        humidity_min=40, humidity_max=60,
        optimal_lunar_phases=frozenset({WAXING_CRESCENT, FIRST_QUARTER}),
        water_need="medium",
        description="Fruta tropical dulce muy apreciada. Los árboles pueden vivir más de 100 años produciendo frutos.",
    ),
    Crop(
        id="maiz",
        name="Maíz",
        icon="🌽",
        temp_min=18, temp_max=32,
        humidity_min=50, humidity_max=75,
        optimal_lunar_phases=frozenset({WAXING_CRESCENT}),
        water_need="medium",
        description="Cereal básico en la alimentación ecuatoriana. Versátil en su uso, desde alimentación hasta forraje.",
    ),
    Crop(
        id="verde",
        name="Plátano Verde",
        icon="🍌",
        temp_min=20, temp_max=35,
        humidity_min=70, humidity_max=90,
        optimal_lunar_phases=frozenset({WAXING_CRESCENT, FIRST_QUARTER}),
        water_need="high",
        description="Variedad de plátano consumido principalmente cocinado. Base de platos tradicionales como el bolón.",
    ),
]

_CROPS_BY_ID: Dict[str, Crop] = {crop.id: crop for crop in CROP_DATABASE}


def get_crop(crop_id: str) -> Optional[Crop]:
    """Catalog lookup by identifier; None when unknown."""
    return _CROPS_BY_ID.get(crop_id)


# --- Scoring bands ---

PHASE_MATCH_POINTS = 30
# Waxing phases favour most crops even when not listed as optimal
FALLBACK_PHASES = frozenset({WAXING_CRESCENT, FIRST_QUARTER})
PHASE_FALLBACK_POINTS = 15

TEMP_MATCH_POINTS = 40
TEMP_MARGIN_C = 3
TEMP_NEAR_POINTS = 20

WATER_IDEAL_POINTS = 30
WATER_ACCEPTABLE_POINTS = 15

# water_need -> predicate over daily precipitation (mm)
IDEAL_PRECIPITATION: Dict[str, Callable[[float], bool]] = {
    "high": lambda mm: mm >= 5,
    "medium-high": lambda mm: 3 <= mm <= 10,
    "medium": lambda mm: 1 <= mm <= 7,
    "medium-low": lambda mm: 0 <= mm <= 5,
    "low": lambda mm: mm < 3,
}
ACCEPTABLE_PRECIPITATION: Dict[str, Callable[[float], bool]] = {
    "high": lambda mm: mm >= 2,
    "medium-high": lambda mm: mm >= 1,
    "medium": lambda mm: mm <= 10,
    "medium-low": lambda mm: mm <= 7,
    "low": lambda mm: mm <= 5,
}

RECOMMENDED_LEVEL_THRESHOLD = 60


def _phase_points(crop: Crop, lunar_phase: str) -> int:
    if lunar_phase in crop.optimal_lunar_phases:
        return PHASE_MATCH_POINTS
    if lunar_phase in FALLBACK_PHASES:
        return PHASE_FALLBACK_POINTS
    return 0


def _temperature_points(crop: Crop, temperature: float) -> int:
    if crop.temp_min <= temperature <= crop.temp_max:
        return TEMP_MATCH_POINTS
    if crop.temp_min - TEMP_MARGIN_C <= temperature <= crop.temp_max + TEMP_MARGIN_C:
        return TEMP_NEAR_POINTS
    return 0


def _water_points(crop: Crop, precipitation: float) -> int:
    if IDEAL_PRECIPITATION[crop.water_need](precipitation):
        return WATER_IDEAL_POINTS
    if ACCEPTABLE_PRECIPITATION[crop.water_need](precipitation):
        return WATER_ACCEPTABLE_POINTS
    return 0


def calculate_recommendation_level(
    crop: Crop,
    lunar_phase: str,
    temperature: float,
    humidity: float,
    precipitation: float,
) -> int:
    """
    Recommendation level (0-100) of a crop for one day.

    Three independent bands are summed:
        lunar phase   0 / 15 / 30
        temperature   0 / 20 / 40
        water need    0 / 15 / 30

    Args:
        crop: Catalog entry
        lunar_phase: Canonical phase label; unknown labels score 0 in the phase band
        temperature: Daily average temperature in Celsius
        humidity: Accepted for callers' convenience; not part of the level
        precipitation: Daily total precipitation in mm

    Returns:
        Integer level in [0, 100].
    """
    return (
        _phase_points(crop, lunar_phase)
        + _temperature_points(crop, temperature)
        + _water_points(crop, precipitation)
    )


def is_recommended_level(level: int) -> bool:
    return level > RECOMMENDED_LEVEL_THRESHOLD


def _optimal_phases_display(crop: Crop) -> str:
    ordered = [p for p in PHASES if p in crop.optimal_lunar_phases]
    ordered += sorted(p for p in crop.optimal_lunar_phases if p not in PHASES)
    return " o ".join(spanish_name(p) for p in ordered)


def crop_recommendation_reason(
    crop: Crop,
    lunar_phase: str,
    temperature: float,
    precipitation: float,
) -> str:
    """
    Human-readable rationale for a crop's level.
    Precipitation is judged against the ideal window only, so a crop earning
    partial water points can still be described as having poor moisture.
    """
    good_phase = lunar_phase in crop.optimal_lunar_phases
    good_temperature = crop.temp_min <= temperature <= crop.temp_max
    good_precipitation = IDEAL_PRECIPITATION[crop.water_need](precipitation)
    temp_range = f"{crop.temp_min:g}°C - {crop.temp_max:g}°C"

    if good_phase and good_temperature and good_precipitation:
        return f"Condiciones ideales para {crop.name}. Fase lunar, temperatura y humedad óptimas."
    if not good_phase and good_temperature and good_precipitation:
        return (
            f"Temperatura y humedad ideales para {crop.name}, "
            f"pero mejor fase lunar sería {_optimal_phases_display(crop)}."
        )
    if good_phase and not good_temperature and good_precipitation:
        return (
            f"Fase lunar y humedad buenas para {crop.name}, "
            f"pero la temperatura está fuera del rango óptimo ({temp_range})."
        )
    if good_phase and good_temperature and not good_precipitation:
        return (
            f"Fase lunar y temperatura ideales para {crop.name}, "
            "pero las condiciones de humedad no son óptimas."
        )
    if not (good_phase or good_temperature or good_precipitation):
        return f"Condiciones no favorables para {crop.name}. Considere esperar a mejores condiciones."
    return f"Condiciones parcialmente favorables para {crop.name}. Algunos factores no son óptimos."
