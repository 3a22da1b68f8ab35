"""
Salitre Agro - Field activity rules.
Six independent rules (plant, water, prune, harvest, fertilize, weed), each a
predicate over the day's lunar phase and precipitation (planting also looks at
temperature) paired with the explanation shown to the farmer.
"""
from typing import Callable, List, NamedTuple

from lunar import (
    FIRST_QUARTER,
    FULL_MOON,
    LAST_QUARTER,
    WANING_CRESCENT,
    WANING_GIBBOUS,
    WAXING_CRESCENT,
    WAXING_GIBBOUS,
    spanish_name,
)
from models import ActivityRecommendation

PLANTING_PHASES = frozenset({WAXING_CRESCENT, FIRST_QUARTER})
PLANTING_TEMP_MIN = 18
PLANTING_TEMP_MAX = 32
PLANTING_RAIN_LIMIT = 10  # mm, planting needs strictly less

WATERING_PHASES = frozenset({WAXING_CRESCENT, FIRST_QUARTER, WAXING_GIBBOUS})
WATERING_RAIN_LIMIT = 5

PRUNING_PHASES = frozenset({WANING_CRESCENT, LAST_QUARTER})
PRUNING_RAIN_LIMIT = 2

HARVESTING_PHASES = frozenset({FULL_MOON, WANING_GIBBOUS})
HARVESTING_RAIN_LIMIT = 8

FERTILIZING_PHASES = frozenset({WAXING_CRESCENT, FIRST_QUARTER})
FERTILIZING_RAIN_LIMIT = 10

WEEDING_PHASES = frozenset({WANING_CRESCENT, LAST_QUARTER})
WEEDING_RAIN_LIMIT = 15


# --- Planting ---

def is_planting_recommended(lunar_phase: str, temperature: float, precipitation: float) -> bool:
    return (
        lunar_phase in PLANTING_PHASES
        and PLANTING_TEMP_MIN <= temperature <= PLANTING_TEMP_MAX
        and precipitation < PLANTING_RAIN_LIMIT
    )


def planting_reason(lunar_phase: str, temperature: float, precipitation: float) -> str:
    if precipitation >= PLANTING_RAIN_LIMIT:
        return "Exceso de lluvia puede afectar la germinación de semillas."
    if temperature < PLANTING_TEMP_MIN:
        return "Temperatura demasiado baja para la mayoría de cultivos."
    if temperature > PLANTING_TEMP_MAX:
        return "Temperatura demasiado alta puede estresar las plántulas nuevas."
    if lunar_phase not in PLANTING_PHASES:
        return (
            f"La fase {spanish_name(lunar_phase)} no es óptima para sembrar. "
            "Mejor esperar hasta Luna Creciente."
        )
    return "Excelentes condiciones para sembrar. La fase lunar favorece el crecimiento y desarrollo de raíces."


# --- Watering ---

def is_watering_recommended(lunar_phase: str, precipitation: float) -> bool:
    if precipitation > WATERING_RAIN_LIMIT:
        return False
    return lunar_phase in WATERING_PHASES


def watering_reason(lunar_phase: str, precipitation: float) -> str:
    if precipitation > WATERING_RAIN_LIMIT:
        return "Hay suficiente lluvia natural, no es necesario regar."
    if lunar_phase not in WATERING_PHASES:
        return f"En fase {spanish_name(lunar_phase)}, regar moderadamente para evitar pudrición."
    return "Buen momento para regar. Las plantas absorben agua más eficientemente en esta fase lunar."


# --- Pruning ---

def is_pruning_recommended(lunar_phase: str, precipitation: float) -> bool:
    if precipitation > PRUNING_RAIN_LIMIT:
        return False
    return lunar_phase in PRUNING_PHASES


def pruning_reason(lunar_phase: str, precipitation: float) -> str:
    if precipitation > PRUNING_RAIN_LIMIT:
        return "Evite podar con lluvia para prevenir enfermedades fungosas."
    if lunar_phase not in PRUNING_PHASES:
        return (
            f"En fase {spanish_name(lunar_phase)}, la poda puede debilitar la planta. "
            "Mejor esperar a Luna Menguante."
        )
    return "Excelente momento para podar. La planta sangrará menos y cicatrizará mejor."


# --- Harvesting ---

def is_harvesting_recommended(lunar_phase: str, precipitation: float) -> bool:
    if precipitation > HARVESTING_RAIN_LIMIT:
        return False
    return lunar_phase in HARVESTING_PHASES


def harvesting_reason(lunar_phase: str, precipitation: float) -> str:
    if precipitation > HARVESTING_RAIN_LIMIT:
        return "Evite cosechar con lluvia fuerte para mantener la calidad del producto."
    if lunar_phase not in HARVESTING_PHASES:
        return (
            f"En fase {spanish_name(lunar_phase)}, los cultivos pueden tener menos sabor "
            "y menor tiempo de almacenamiento."
        )
    return "Excelente momento para cosechar. Los cultivos tendrán mejor sabor y durarán más tiempo almacenados."


# --- Fertilizing ---

def is_fertilizing_recommended(lunar_phase: str, precipitation: float) -> bool:
    if precipitation > FERTILIZING_RAIN_LIMIT:
        return False
    return lunar_phase in FERTILIZING_PHASES


def fertilizing_reason(lunar_phase: str, precipitation: float) -> str:
    if precipitation > FERTILIZING_RAIN_LIMIT:
        return "Demasiada lluvia lavará los nutrientes. Mejor esperar a que esté más seco."
    if lunar_phase not in FERTILIZING_PHASES:
        return (
            f"En fase {spanish_name(lunar_phase)}, las plantas absorben menos nutrientes. "
            "Mejor esperar a Luna Creciente."
        )
    return "Buen momento para fertilizar. Las plantas absorberán los nutrientes eficientemente."


# --- Weeding ---

def is_weeding_recommended(lunar_phase: str, precipitation: float) -> bool:
    if precipitation > WEEDING_RAIN_LIMIT:
        return False
    return lunar_phase in WEEDING_PHASES


def weeding_reason(lunar_phase: str, precipitation: float) -> str:
    if precipitation > WEEDING_RAIN_LIMIT:
        return "El suelo mojado dificulta la eliminación de malas hierbas y puede compactar el terreno."
    if lunar_phase not in WEEDING_PHASES:
        return (
            f"En fase {spanish_name(lunar_phase)}, las malas hierbas vuelven a crecer "
            "más rápido si se arrancan."
        )
    return "Excelente momento para eliminar malas hierbas. Arrancarlas en esta fase lunar reduce su regeneración."


# --- Rule table ---

class ActivityRule(NamedTuple):
    id: str
    name: str
    icon: str
    # (lunar_phase, temperature, precipitation) -> value
    predicate: Callable[[str, float, float], bool]
    reason: Callable[[str, float, float], str]


ACTIVITY_RULES: List[ActivityRule] = [
    ActivityRule("plant", "Sembrar", "🌱", is_planting_recommended, planting_reason),
    ActivityRule(
        "water", "Regar", "💧",
        lambda phase, temp, rain: is_watering_recommended(phase, rain),
        lambda phase, temp, rain: watering_reason(phase, rain),
    ),
    ActivityRule(
        "prune", "Podar", "✂️",
        lambda phase, temp, rain: is_pruning_recommended(phase, rain),
        lambda phase, temp, rain: pruning_reason(phase, rain),
    ),
    ActivityRule(
        "harvest", "Cosechar", "🧺",
        lambda phase, temp, rain: is_harvesting_recommended(phase, rain),
        lambda phase, temp, rain: harvesting_reason(phase, rain),
    ),
    ActivityRule(
        "fertilize", "Abonar", "💩",
        lambda phase, temp, rain: is_fertilizing_recommended(phase, rain),
        lambda phase, temp, rain: fertilizing_reason(phase, rain),
    ),
    ActivityRule(
        "weed", "Desherbar", "🌿",
        lambda phase, temp, rain: is_weeding_recommended(phase, rain),
        lambda phase, temp, rain: weeding_reason(phase, rain),
    ),
]


def evaluate_activities(lunar_phase: str, temperature: float, precipitation: float) -> List[ActivityRecommendation]:
    """All six activities in their fixed display order."""
    return [
        ActivityRecommendation(
            activity_id=rule.id,
            activity=rule.name,
            is_recommended=rule.predicate(lunar_phase, temperature, precipitation),
            reason=rule.reason(lunar_phase, temperature, precipitation),
            icon=rule.icon,
        )
        for rule in ACTIVITY_RULES
    ]
