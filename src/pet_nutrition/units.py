from __future__ import annotations

import logging
import math
import re
from types import MappingProxyType

logger = logging.getLogger(__name__)

LB_PER_KG = 2.20462

# Grams in one serving unit. ``g`` is a one-gram serving here; display code
# that shows calories "per 100g" must use grams_per_display_unit instead.
GRAMS_PER_UNIT = MappingProxyType(
    {
        "g": 1.0,
        "oz": 28.3495,
        "can": 85.0,
        "piece": 30.0,
        "scoop": 15.0,
        "pump": 5.0,
    }
)

# Approximate grams per cup by food density.
CUP_GRAMS_BY_CATEGORY = MappingProxyType(
    {
        "dry": 120.0,
        "wet": 240.0,
        "raw": 225.0,
        "treat": 100.0,
        "supplement": 150.0,
    }
)
DEFAULT_CUP_GRAMS = 150.0
DISPLAY_GRAMS = 100.0

CUP_FRACTIONS: tuple[tuple[float, str], ...] = (
    (1 / 8, "1/8"),
    (1 / 4, "1/4"),
    (1 / 3, "1/3"),
    (3 / 8, "3/8"),
    (1 / 2, "1/2"),
    (5 / 8, "5/8"),
    (2 / 3, "2/3"),
    (3 / 4, "3/4"),
    (7 / 8, "7/8"),
)
FRACTION_TOLERANCE = 0.05

_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    if math.isnan(value) or math.isinf(value):
        return 0
    return int(math.floor(value + 0.5))


def convert_weight(value: float, from_unit: str, to_unit: str) -> float:
    if from_unit == to_unit:
        return value
    if from_unit == "lb":
        return value / LB_PER_KG
    return value * LB_PER_KG


def cup_grams(category: str | None) -> float:
    if category is None:
        return DEFAULT_CUP_GRAMS
    return CUP_GRAMS_BY_CATEGORY.get(category, DEFAULT_CUP_GRAMS)


def grams_per_serving_unit(unit: str, category: str | None, serving_grams: float | None = None) -> float:
    """Mass of one ``unit`` of a food, preferring an exact ``serving_grams``.

    Callers pass ``serving_grams`` only when ``unit`` is the food's own
    serving unit; the exact weight says nothing about other units.
    """
    if serving_grams:
        return serving_grams
    if unit == "cup":
        return cup_grams(category)
    if unit not in GRAMS_PER_UNIT:
        logger.debug("No gram equivalent for unit %r, treating it as 1 g", unit)
    return GRAMS_PER_UNIT.get(unit, 1.0)


def grams_per_display_unit(unit: str, category: str | None) -> float:
    """Mass behind one display unit: 100 g for gram foods, else one serving."""
    if unit == "g":
        return DISPLAY_GRAMS
    return grams_per_serving_unit(unit, category)


def _leading_float(text: str) -> float:
    match = _LEADING_NUMBER.match(text.strip())
    if match is None:
        return 0.0
    return float(match.group(0))


def parse_fraction(text: str) -> float:
    """Parse "2", "2.5", "3/4" or "1 1/2". Anything unparseable is 0."""
    text = text.strip()
    if "/" not in text:
        return _leading_float(text)

    parts = text.split()
    whole = 0.0
    fraction_text = text
    if len(parts) == 2:
        whole = _leading_float(parts[0])
        fraction_text = parts[1]

    pieces = fraction_text.split("/")
    numerator = _leading_float(pieces[0])
    denominator = _leading_float(pieces[1]) if len(pieces) > 1 else 0.0
    if not numerator or not denominator:
        return whole
    return whole + numerator / denominator


def format_portion(value: float, unit: str) -> str:
    if math.isnan(value) or math.isinf(value) or value == 0:
        return f"0 {unit}s"

    if unit != "cup":
        suffix = "" if value == 1 else "s"
        return f"{value:.1f} {unit}{suffix}"

    whole = math.floor(value)
    fractional = value - whole
    if fractional == 0:
        return f"{whole} cup{'' if whole == 1 else 's'}"

    closest_value, closest_display = min(CUP_FRACTIONS, key=lambda f: abs(fractional - f[0]))
    if abs(fractional - closest_value) > FRACTION_TOLERANCE:
        return f"{value:.2f} cups"
    if whole == 0:
        return f"{closest_display} cup"
    return f"{whole} {closest_display} cups"


def format_weight(grams: float | None, serving_unit: str) -> str:
    if not grams:
        return ""
    if serving_unit == "g":
        return f"{round_half_up(grams)}g"
    return f"({round_half_up(grams)}g)"
