"""Meal plans: splitting the daily target across meals and keeping each
meal's line items summed to its target.

Every function takes snapshots and returns new values. Callers that read
items from a store, redistribute and write back are responsible for
serializing that sequence; results are only as fresh as their input.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace

from .models import FoodItem, Meal, MealLineItem
from .portions import calculate_calories, calculate_portion, calories_per_portion_unit, portion_grams
from .units import round_half_up

logger = logging.getLogger(__name__)

PERCENT_TOLERANCE = 0.01
TREATS_SORT_ORDER = 99
OVER_TARGET_RATIO = 1.1
UNDER_TARGET_RATIO = 0.9
# Gram fallback for items without a gram snapshot.
FALLBACK_GRAMS_PER_UNIT = 100


@dataclass(frozen=True)
class MealSlot:
    name: str
    percent: float
    sort_order: int


@dataclass(frozen=True)
class MacroTotals:
    protein_g: float
    fat_g: float


DEFAULT_MEAL_CONFIGS: dict[int, tuple[MealSlot, ...]] = {
    1: (
        MealSlot("Meal", 90, 1),
        MealSlot("Treats", 10, TREATS_SORT_ORDER),
    ),
    2: (
        MealSlot("Breakfast", 45, 1),
        MealSlot("Dinner", 45, 2),
        MealSlot("Treats", 10, TREATS_SORT_ORDER),
    ),
    3: (
        MealSlot("Breakfast", 30, 1),
        MealSlot("Lunch", 35, 2),
        MealSlot("Dinner", 30, 3),
        MealSlot("Treats", 5, TREATS_SORT_ORDER),
    ),
}


def _resize(item: MealLineItem, target_calories: float) -> MealLineItem:
    unit_calories = calories_per_portion_unit(item.portion_unit, item.food)
    quantity = calculate_portion(target_calories, unit_calories)
    return replace(
        item,
        portion_quantity=quantity,
        calculated_calories=calculate_calories(quantity, item.portion_unit, item.food),
        portion_grams=portion_grams(quantity, item.portion_unit, item.food),
    )


def redistribute_calories(meal_target_calories: float, items: Sequence[MealLineItem]) -> list[MealLineItem]:
    """Split what manual items leave of the target equally across auto items.

    Manually adjusted items are returned untouched. Order is preserved.
    """
    manual = [item for item in items if item.manually_adjusted]
    auto = [item for item in items if not item.manually_adjusted]
    if not auto:
        return list(items)

    manual_calories = sum(item.calculated_calories for item in manual)
    remaining = max(0.0, meal_target_calories - manual_calories)
    share = remaining / len(auto)
    logger.debug(
        "Redistributing %.1f kcal over %d auto items (%d kcal locked)", remaining, len(auto), manual_calories
    )
    return [item if item.manually_adjusted else _resize(item, share) for item in items]


def default_meal_config(meal_count: int) -> tuple[MealSlot, ...]:
    return DEFAULT_MEAL_CONFIGS.get(meal_count, DEFAULT_MEAL_CONFIGS[2])


def validate_meal_percentages(percents: Sequence[float]) -> bool:
    return abs(sum(percents) - 100) < PERCENT_TOLERANCE


def meal_target_calories(daily_calories: float, percent: float) -> int:
    return round_half_up(daily_calories * percent / 100)


def build_meals(daily_calories: float, meal_count: int) -> list[Meal]:
    return [
        Meal(
            name=slot.name,
            target_percent=slot.percent,
            target_calories=meal_target_calories(daily_calories, slot.percent),
            sort_order=slot.sort_order,
        )
        for slot in default_meal_config(meal_count)
    ]


def new_line_item(food: FoodItem, meal_target_calories: float, items: Sequence[MealLineItem], item_id: str = "") -> MealLineItem:
    """Size a new auto item in the food's own unit as one more equal share."""
    manual_calories = sum(item.calculated_calories for item in items if item.manually_adjusted)
    auto_count = sum(1 for item in items if not item.manually_adjusted) + 1
    share = max(0.0, meal_target_calories - manual_calories) / auto_count
    quantity = calculate_portion(share, food.calories_per_unit)
    return MealLineItem(
        food=food,
        portion_quantity=quantity,
        portion_unit=food.serving_unit,
        calculated_calories=calculate_calories(quantity, food.serving_unit, food),
        portion_grams=portion_grams(quantity, food.serving_unit, food),
        manually_adjusted=False,
        id=item_id or food.id,
    )


def _with_items(meal: Meal, items: Sequence[MealLineItem]) -> Meal:
    return replace(meal, items=tuple(redistribute_calories(meal.target_calories, items)))


def add_food(meal: Meal, food: FoodItem, item_id: str = "") -> Meal:
    item = new_line_item(food, meal.target_calories, meal.items, item_id)
    return _with_items(meal, [*meal.items, item])


def set_portion(meal: Meal, item_id: str, quantity: float, unit: str) -> Meal:
    """Apply a user edit: the item is locked and the rest rebalanced."""
    items = []
    found = False
    for item in meal.items:
        if item.id == item_id:
            found = True
            item = replace(
                item,
                portion_quantity=quantity,
                portion_unit=unit,
                calculated_calories=calculate_calories(quantity, unit, item.food),
                portion_grams=portion_grams(quantity, unit, item.food),
                manually_adjusted=True,
            )
        items.append(item)
    if not found:
        raise ValueError(f"meal {meal.name!r} has no item {item_id!r}")
    return _with_items(meal, items)


def remove_item(meal: Meal, item_id: str) -> Meal:
    items = [item for item in meal.items if item.id != item_id]
    if len(items) == len(meal.items):
        raise ValueError(f"meal {meal.name!r} has no item {item_id!r}")
    return _with_items(meal, items)


def meal_total_calories(items: Sequence[MealLineItem]) -> int:
    return sum(item.calculated_calories for item in items)


def calorie_status(total_calories: float, target_calories: float) -> str:
    if total_calories > target_calories * OVER_TARGET_RATIO:
        return "over"
    if total_calories < target_calories * UNDER_TARGET_RATIO:
        return "under"
    return "good"


def meal_macros(items: Sequence[MealLineItem]) -> MacroTotals:
    protein = 0.0
    fat = 0.0
    for item in items:
        grams = item.portion_grams or item.portion_quantity * FALLBACK_GRAMS_PER_UNIT
        if item.food.protein_percent:
            protein += grams * item.food.protein_percent / 100
        if item.food.fat_percent:
            fat += grams * item.food.fat_percent / 100
    return MacroTotals(protein_g=protein, fat_g=fat)
