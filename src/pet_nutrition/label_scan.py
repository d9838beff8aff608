from __future__ import annotations

import re
from dataclasses import dataclass

from .units import parse_fraction

CALORIES_PATTERN = re.compile(r"(?:calories|calorie|kcal|energy)[\s:]*(\d+)", re.IGNORECASE)
PROTEIN_PATTERN = re.compile(r"protein[\s:]*(\d+(?:\.\d+)?)\s*%?", re.IGNORECASE)
FAT_PATTERN = re.compile(r"(?:fat|crude fat)[\s:]*(\d+(?:\.\d+)?)\s*%?", re.IGNORECASE)
FIBER_PATTERN = re.compile(r"fiber[\s:]*(\d+(?:\.\d+)?)\s*%?", re.IGNORECASE)
MOISTURE_PATTERN = re.compile(r"moisture[\s:]*(\d+(?:\.\d+)?)\s*%?", re.IGNORECASE)
SERVING_PATTERN = re.compile(
    r"(?:serving size|serving)[\s:]*(\d+(?:\.\d+)?)\s*(cup|can|oz|g|kg|lb|piece)", re.IGNORECASE
)


@dataclass(frozen=True)
class LabelScan:
    """Best-effort fields read from nutrition label text."""

    raw_text: str
    brand: str = ""
    product_name: str = ""
    calories: int | None = None
    protein: float | None = None
    fat: float | None = None
    fiber: float | None = None
    moisture: float | None = None
    serving_size: str | None = None
    serving_unit: str | None = None
    confidence: str = "low"

    @property
    def serving_quantity(self) -> float | None:
        if self.serving_size is None:
            return None
        return parse_fraction(self.serving_size)


def _search_float(pattern: re.Pattern[str], text: str) -> float | None:
    match = pattern.search(text)
    return float(match.group(1)) if match else None


def parse_nutrition_facts(text: str) -> LabelScan:
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    full_text = " ".join(lines)

    found: dict[str, object] = {}
    calories = CALORIES_PATTERN.search(full_text)
    if calories:
        found["calories"] = int(calories.group(1))
    for key, pattern in (
        ("protein", PROTEIN_PATTERN),
        ("fat", FAT_PATTERN),
        ("fiber", FIBER_PATTERN),
        ("moisture", MOISTURE_PATTERN),
    ):
        value = _search_float(pattern, full_text)
        if value is not None:
            found[key] = value
    serving = SERVING_PATTERN.search(full_text)
    if serving:
        found["serving_size"] = serving.group(1)
        found["serving_unit"] = serving.group(2).lower()

    # Serving size and unit count as two fields.
    return LabelScan(
        raw_text=text,
        brand=lines[0] if lines else "",
        product_name=lines[1] if len(lines) > 1 else "",
        confidence="high" if len(found) > 2 else "low",
        **found,
    )
