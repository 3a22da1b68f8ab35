"""
Salitre Agro - Lunar phase vocabulary.
Canonical English phase labels (as reported by the astronomy provider), their
Spanish display names for the Salitre community, and emoji.
"""
from typing import Dict, Tuple

NEW_MOON = "New Moon"
WAXING_CRESCENT = "Waxing Crescent"
FIRST_QUARTER = "First Quarter"
WAXING_GIBBOUS = "Waxing Gibbous"
FULL_MOON = "Full Moon"
WANING_GIBBOUS = "Waning Gibbous"
LAST_QUARTER = "Last Quarter"
WANING_CRESCENT = "Waning Crescent"

# Lunar cycle order
PHASES: Tuple[str, ...] = (
    NEW_MOON,
    WAXING_CRESCENT,
    FIRST_QUARTER,
    WAXING_GIBBOUS,
    FULL_MOON,
    WANING_GIBBOUS,
    LAST_QUARTER,
    WANING_CRESCENT,
)

SPANISH_NAMES: Dict[str, str] = {
    NEW_MOON: "Luna Nueva",
    WAXING_CRESCENT: "Luna Creciente",
    FIRST_QUARTER: "Cuarto Creciente",
    WAXING_GIBBOUS: "Gibosa Creciente",
    FULL_MOON: "Luna Llena",
    WANING_GIBBOUS: "Gibosa Menguante",
    LAST_QUARTER: "Cuarto Menguante",
    WANING_CRESCENT: "Luna Menguante",
}

PHASE_EMOJI: Dict[str, str] = {
    NEW_MOON: "🌑",
    WAXING_CRESCENT: "🌒",
    FIRST_QUARTER: "🌓",
    WAXING_GIBBOUS: "🌔",
    FULL_MOON: "🌕",
    WANING_GIBBOUS: "🌖",
    LAST_QUARTER: "🌗",
    WANING_CRESCENT: "🌘",
}

# Lookup from lowercased English or Spanish name -> canonical label
_ALIASES: Dict[str, str] = {}
for _phase in PHASES:
    _ALIASES[_phase.lower()] = _phase
    _ALIASES[SPANISH_NAMES[_phase].lower()] = _phase


def normalize_phase(text: str) -> str:
    """
    Map provider text ("waxing crescent", "Waxing Crescent") or a Spanish
    display name ("Luna Creciente") to the canonical label.
    Unknown text comes back stripped but otherwise unchanged.
    """
    cleaned = text.strip()
    return _ALIASES.get(cleaned.lower(), cleaned)


def spanish_name(phase: str) -> str:
    """Spanish display name; unknown labels are shown as-is."""
    return SPANISH_NAMES.get(phase, phase)


def phase_emoji(phase: str) -> str:
    return PHASE_EMOJI.get(phase, PHASE_EMOJI[NEW_MOON])
