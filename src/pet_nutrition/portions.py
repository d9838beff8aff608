from __future__ import annotations

import math

from .models import FoodItem
from .units import grams_per_display_unit, grams_per_serving_unit, round_half_up


def _base_unit_grams(food: FoodItem) -> float:
    return grams_per_serving_unit(food.serving_unit, food.category, food.serving_grams)


def calories_per_portion_unit(unit: str, food: FoodItem) -> float:
    """Unrounded calories in one ``unit`` of ``food``."""
    if unit == food.serving_unit:
        return food.calories_per_unit
    base_grams = _base_unit_grams(food)
    if base_grams <= 0:
        return 0.0
    return grams_per_serving_unit(unit, food.category) / base_grams * food.calories_per_unit


def calculate_calories(quantity: float, unit: str, food: FoodItem) -> int:
    if math.isnan(quantity):
        return 0
    if unit == food.serving_unit:
        return round_half_up(quantity * food.calories_per_unit)

    portion_grams = quantity * grams_per_serving_unit(unit, food.category)
    base_grams = _base_unit_grams(food)
    if base_grams <= 0:
        return 0
    return round_half_up(portion_grams / base_grams * food.calories_per_unit)


def calculate_portion(target_calories: float, calories_per_unit: float) -> float:
    if calories_per_unit == 0:
        return 0.0
    return target_calories / calories_per_unit


def calories_for_display(food: FoodItem) -> float:
    """Calories per display unit: per 100 g for gram foods, else per serving."""
    if food.serving_unit != "g":
        return food.calories_per_unit
    display_grams = grams_per_display_unit(food.serving_unit, food.category)
    return display_grams / _base_unit_grams(food) * food.calories_per_unit


def portion_grams(quantity: float, unit: str, food: FoodItem) -> int | None:
    """Exact gram weight of a portion, when the food's serving weight is known."""
    if not food.serving_grams or unit != food.serving_unit:
        return None
    return round_half_up(food.serving_grams * quantity)
