"""
Salitre Agro - Field advisories.
Short guidance derived from current weather, a crop's condition status, and
the colour band used to present a recommendation level.
"""
from models import Crop, CropConditionStatus, CurrentWeather, FieldAdvisory

EXTREME_HEAT_C = 35
HEAVY_RAIN_MM = 15
STRONG_WIND_KPH = 40
HOT_DAY_C = 30

RAIN_WORDS = ("lluvia", "llovizna", "rain", "drizzle", "shower")
SUN_WORDS = ("sol", "soleado", "despejado", "sun", "clear")
CLOUD_WORDS = ("nublado", "cubierto", "cloud", "overcast")


def _mentions(condition: str, words) -> bool:
    return any(word in condition for word in words)


def field_advisory(current: CurrentWeather) -> FieldAdvisory:
    """
    Advice for field work under the current weather.
    Extreme conditions win, then the generally favourable case, then the
    sky description.
    """
    temp = current.temp_c
    humidity = current.humidity
    precipitation = current.precip_mm
    wind = current.wind_kph
    condition = current.condition.lower()

    if temp > EXTREME_HEAT_C:
        return FieldAdvisory(
            message="Temperatura extremadamente alta. Evite trabajos físicos intensos y riegue temprano en la mañana o tarde en la noche.",
            kind="warning",
        )
    if precipitation > HEAVY_RAIN_MM:
        return FieldAdvisory(
            message="Precipitación abundante. Evite labores en el campo que puedan compactar el suelo o promover erosión.",
            kind="warning",
        )
    if wind > STRONG_WIND_KPH:
        return FieldAdvisory(
            message="Vientos fuertes. No aplique agroquímicos ni fertilizantes, y proteja cultivos sensibles.",
            kind="warning",
        )
    if 22 <= temp <= 32 and 60 <= humidity <= 80 and precipitation < 5 and wind < 20:
        return FieldAdvisory(
            message="Condiciones óptimas para la mayoría de labores agrícolas. Buen momento para sembrar, podar o aplicar fertilizantes según la fase lunar.",
            kind="positive",
        )
    if _mentions(condition, RAIN_WORDS):
        return FieldAdvisory(
            message="Condiciones lluviosas. Aproveche para sembrar en suelos secos o trasplantar, pero evite labores que compacten el suelo.",
            kind="neutral",
        )
    if _mentions(condition, SUN_WORDS):
        if temp > HOT_DAY_C:
            return FieldAdvisory(
                message="Día soleado y caluroso. Asegure riego adecuado y proteja plantas sensibles del sol directo en horas pico.",
                kind="neutral",
            )
        return FieldAdvisory(
            message="Día soleado con temperatura moderada. Excelente para la mayoría de labores agrícolas y cosecha.",
            kind="positive",
        )
    if _mentions(condition, CLOUD_WORDS):
        return FieldAdvisory(
            message="Cielo nublado. Buenas condiciones para trasplantes, siembra y labores que requieran menor estrés por calor.",
            kind="positive",
        )
    return FieldAdvisory(
        message="Condiciones aceptables para labores agrícolas rutinarias. Consulte el calendario lunar para actividades específicas.",
        kind="neutral",
    )


def crop_condition_status(crop: Crop, temperature: float, lunar_phase: str) -> CropConditionStatus:
    """Optimal when temperature and phase both suit the crop, good when one does."""
    good_temperature = crop.temp_min <= temperature <= crop.temp_max
    good_phase = lunar_phase in crop.optimal_lunar_phases
    if good_temperature and good_phase:
        return CropConditionStatus(status="optimal", message="Condiciones óptimas para este cultivo")
    if good_temperature or good_phase:
        return CropConditionStatus(status="good", message="Condiciones aceptables para este cultivo")
    return CropConditionStatus(status="poor", message="Condiciones no ideales para este cultivo")


def level_band(level: int) -> str:
    """Presentation band for a recommendation level."""
    if level >= 80:
        return "excellent"
    if level >= 60:
        return "good"
    if level >= 40:
        return "fair"
    if level >= 20:
        return "low"
    return "poor"
