import math

import pytest

from pet_nutrition.models import FoodItem
from pet_nutrition.portions import (
    calculate_calories,
    calculate_portion,
    calories_for_display,
    calories_per_portion_unit,
    portion_grams,
)


def _food(**overrides) -> FoodItem:
    data = {
        "brand": "Acme",
        "name": "Chicken Kibble",
        "category": "dry",
        "calories_per_unit": 350.0,
        "serving_unit": "cup",
    }
    data.update(overrides)
    return FoodItem(**data)


def test_calories_in_native_unit() -> None:
    food = _food(calories_per_unit=100.0)
    assert calculate_calories(3, "cup", food) == 300
    assert calculate_calories(0.25, "cup", food) == 25


def test_calories_in_grams_for_cup_food() -> None:
    assert calculate_calories(60, "g", _food()) == 175


def test_calories_use_exact_serving_grams() -> None:
    food = _food(serving_grams=100.0)
    assert calculate_calories(50, "g", food) == 175


def test_calories_across_fixed_units() -> None:
    can_food = _food(category="wet", calories_per_unit=300.0, serving_unit="can")
    assert calculate_calories(1, "oz", can_food) == 100
    assert calculate_calories(2, "can", can_food) == 600


def test_calories_from_gram_serving() -> None:
    raw = _food(category="raw", calories_per_unit=1.5, serving_unit="g")
    assert calculate_calories(200, "g", raw) == 300
    assert calculate_calories(1, "cup", raw) == 338


def test_calories_nan_quantity_is_zero() -> None:
    assert calculate_calories(math.nan, "cup", _food()) == 0
    assert calculate_calories(math.nan, "g", _food()) == 0


def test_calculate_portion() -> None:
    assert calculate_portion(300, 100) == 3.0
    assert calculate_portion(300, 0) == 0


@pytest.mark.parametrize("target", [37, 150, 225, 333, 512, 1000])
@pytest.mark.parametrize("unit", ["cup", "g", "oz", "scoop"])
def test_calories_portion_round_trip_drift(target: int, unit: str) -> None:
    food = _food(calories_per_unit=385.0)
    quantity = calculate_portion(target, calories_per_portion_unit(unit, food))
    assert abs(calculate_calories(quantity, unit, food) - target) <= 1


def test_calories_per_portion_unit() -> None:
    food = _food(calories_per_unit=360.0)
    assert calories_per_portion_unit("cup", food) == 360.0
    assert calories_per_portion_unit("g", food) == pytest.approx(3.0)


def test_calories_for_display() -> None:
    raw = _food(category="raw", calories_per_unit=1.5, serving_unit="g")
    assert calories_for_display(raw) == pytest.approx(150.0)
    assert calories_for_display(_food()) == pytest.approx(350.0)
    assert calories_for_display(_food(calories_per_unit=400.0, serving_grams=110.0)) == pytest.approx(400.0)
    gram_food = _food(category="raw", calories_per_unit=150.0, serving_unit="g", serving_grams=100.0)
    assert calories_for_display(gram_food) == pytest.approx(150.0)


def test_portion_grams_snapshot() -> None:
    food = _food(serving_grams=110.0)
    assert portion_grams(2, "cup", food) == 220
    assert portion_grams(2, "oz", food) is None
    assert portion_grams(2, "cup", _food()) is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"category": "kibble"},
        {"serving_unit": "bowl"},
        {"calories_per_unit": -1.0},
        {"serving_grams": 0.0},
    ],
)
def test_food_item_validation(overrides: dict) -> None:
    with pytest.raises(ValueError):
        _food(**overrides)
