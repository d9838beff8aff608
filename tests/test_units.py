import math

import pytest

from pet_nutrition.units import (
    convert_weight,
    format_portion,
    format_weight,
    grams_per_display_unit,
    grams_per_serving_unit,
    parse_fraction,
    round_half_up,
)


def test_convert_weight_lb_to_kg() -> None:
    assert convert_weight(22, "lb", "kg") == pytest.approx(9.98, abs=0.01)
    assert convert_weight(10, "kg", "lb") == pytest.approx(22.05, abs=0.01)


def test_convert_weight_same_unit_is_identity() -> None:
    assert convert_weight(10, "kg", "kg") == 10
    assert convert_weight(22, "lb", "lb") == 22


@pytest.mark.parametrize("weight", [0.1, 1.0, 7.3, 22.0, 45.5, 180.0])
def test_convert_weight_round_trip(weight: float) -> None:
    back = convert_weight(convert_weight(weight, "lb", "kg"), "kg", "lb")
    assert back == pytest.approx(weight, rel=1e-6)


@pytest.mark.parametrize(
    ("unit", "category", "expected"),
    [
        ("g", "dry", 1.0),
        ("oz", "dry", 28.3495),
        ("can", "wet", 85.0),
        ("can", "dry", 85.0),
        ("piece", "treat", 30.0),
        ("scoop", "supplement", 15.0),
        ("pump", "supplement", 5.0),
        ("cup", "dry", 120.0),
        ("cup", "wet", 240.0),
        ("cup", "raw", 225.0),
        ("cup", "treat", 100.0),
        ("cup", "supplement", 150.0),
        ("cup", None, 150.0),
    ],
)
def test_grams_per_serving_unit(unit: str, category, expected: float) -> None:
    assert grams_per_serving_unit(unit, category) == expected


def test_grams_per_serving_unit_prefers_exact_grams() -> None:
    assert grams_per_serving_unit("cup", "dry", serving_grams=105.0) == 105.0


def test_display_unit_uses_100g_for_grams() -> None:
    assert grams_per_display_unit("g", "raw") == 100.0
    assert grams_per_serving_unit("g", "raw") == 1.0
    assert grams_per_display_unit("cup", "wet") == 240.0


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("2", 2.0),
        ("2.5", 2.5),
        ("3/4", 0.75),
        ("1 1/2", 1.5),
        (" 1/2 ", 0.5),
        ("2 x/4", 2.0),
        ("1/0", 0.0),
        ("", 0.0),
        ("abc", 0.0),
        ("1.5 cups", 1.5),
    ],
)
def test_parse_fraction(text: str, expected: float) -> None:
    assert parse_fraction(text) == pytest.approx(expected)


@pytest.mark.parametrize(
    ("value", "unit", "expected"),
    [
        (0.26, "cup", "1/4 cup"),
        (0.9, "cup", "7/8 cup"),
        (0.6, "cup", "5/8 cup"),
        (0.34, "cup", "1/3 cup"),
        (1.5, "cup", "1 1/2 cups"),
        (2.0, "cup", "2 cups"),
        (1.0, "cup", "1 cup"),
        (1.95, "cup", "1.95 cups"),
        (0, "cup", "0 cups"),
        (float("nan"), "cup", "0 cups"),
        (float("inf"), "cup", "0 cups"),
        (float("nan"), "can", "0 cans"),
        (2.5, "can", "2.5 cans"),
        (1, "can", "1.0 can"),
        (3, "piece", "3.0 pieces"),
    ],
)
def test_format_portion(value: float, unit: str, expected: str) -> None:
    assert format_portion(value, unit) == expected


@pytest.mark.parametrize(
    ("grams", "unit", "expected"),
    [
        (None, "cup", ""),
        (0, "g", ""),
        (250.4, "g", "250g"),
        (120, "cup", "(120g)"),
    ],
)
def test_format_weight(grams, unit: str, expected: str) -> None:
    assert format_weight(grams, unit) == expected


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(0.49) == 0
    assert round_half_up(math.nan) == 0
