from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import asdict
from pathlib import Path
from typing import Any, Optional

import typer

from .costs import calculate_daily_cost, calculate_period_cost, estimate_warning, format_cost
from .energy import calculate_mer
from .health import HEALTH_CONDITIONS, load_conditions, multiplier_table
from .label_scan import parse_nutrition_facts
from .meals import meal_total_calories, redistribute_calories
from .models import (
    ActivityInput,
    CategoryActivity,
    FoodItem,
    MealLineItem,
    PetProfile,
    StepsActivity,
    TimeActivity,
)
from .portions import calculate_calories, calculate_portion, calories_per_portion_unit
from .units import format_portion

CONDITIONS_ENV = "PET_NUTRITION_CONDITIONS"

app = typer.Typer(help="Pet nutrition utilities")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _echo(payload: dict[str, Any]) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False))


def _activity_from_options(
    steps: Optional[int],
    minutes: Optional[float],
    pace: str,
    activity: Optional[str],
) -> ActivityInput | None:
    given = [name for name, value in (("--steps", steps), ("--minutes", minutes), ("--activity", activity)) if value is not None]
    if len(given) > 1:
        raise typer.BadParameter(f"use only one of --steps, --minutes, --activity (got {', '.join(given)})")
    if steps is not None:
        return StepsActivity(daily_steps=steps)
    if minutes is not None:
        return TimeActivity(minutes=minutes, pace=pace)
    if activity is not None:
        return CategoryActivity(category=activity)
    return None


def _condition_multipliers() -> Mapping[str, float]:
    path = os.environ.get(CONDITIONS_ENV)
    if not path:
        return multiplier_table(HEALTH_CONDITIONS)
    return multiplier_table(load_conditions(path))


@app.command()
def energy(
    species: str = typer.Option("dog", help="dog or cat"),
    weight: float = typer.Option(..., min=0.0001, help="Body weight"),
    weight_unit: str = typer.Option("kg", help="lb or kg"),
    neutered: bool = typer.Option(True, help="Whether the pet is neutered"),
    steps: Optional[int] = typer.Option(None, min=0, help="Average daily steps"),
    minutes: Optional[float] = typer.Option(None, min=0, help="Daily exercise minutes"),
    pace: str = typer.Option("moderate", help="Exercise pace: slow, moderate, fast"),
    activity: Optional[str] = typer.Option(None, help="sedentary, low, normal, active, highly-active"),
    life_stage: str = typer.Option("adult", help="Life stage"),
    outdoor: str = typer.Option("indoor", help="Hours outdoors: indoor, less-than-2, 2-4, 4-8, 8-12, 12-plus"),
    climate: Optional[str] = typer.Option(None, help="mild, cold, hot"),
    bcs: str = typer.Option("4-5", help="Body condition score band"),
    goal: str = typer.Option("maintain", help="maintain, gain, lose"),
    condition: Optional[list[str]] = typer.Option(None, "--condition", help="Health condition id, repeatable"),
    long_haired: bool = typer.Option(False, help="Long coat, dampens the cold climate factor"),
) -> None:
    """Compute RER and MER for a pet profile."""
    try:
        profile = PetProfile(
            species=species,
            weight=weight,
            weight_unit=weight_unit,
            neutered=neutered,
            activity=_activity_from_options(steps, minutes, pace, activity),
            life_stage=life_stage,
            outdoor_exposure=outdoor,
            climate=climate,
            bcs=bcs,
            weight_goal=goal,
            health_status="has-conditions" if condition else "healthy",
            health_conditions=tuple(condition or ()),
        )
        multipliers = _condition_multipliers()
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    result = calculate_mer(profile, is_long_haired=long_haired, condition_multipliers=multipliers)
    _echo(
        {
            "species": profile.species,
            "weight_kg": round(profile.weight_kg, 2),
            "rer": result.rer,
            "multiplier": result.multiplier,
            "mer": result.mer,
            "breakdown": {name: asdict(detail) for name, detail in result.breakdown.rows()},
        }
    )


def _food_from_options(
    category: str,
    calories_per_unit: float,
    serving_unit: str,
    serving_grams: Optional[float],
) -> FoodItem:
    try:
        return FoodItem(
            brand="",
            name="",
            category=category,
            calories_per_unit=calories_per_unit,
            serving_unit=serving_unit,
            serving_grams=serving_grams,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def portion(
    quantity: float = typer.Option(..., min=0, help="Portion quantity"),
    unit: str = typer.Option(..., help="Portion unit"),
    calories_per_unit: float = typer.Option(..., min=0, help="Food calories per serving unit"),
    serving_unit: str = typer.Option("cup", help="Food serving unit"),
    category: str = typer.Option("dry", help="dry, wet, raw, treat, supplement"),
    serving_grams: Optional[float] = typer.Option(None, help="Exact grams per serving"),
    target: Optional[float] = typer.Option(None, help="Also size a portion for this many kcal"),
) -> None:
    """Calories for a portion of a food, in any serving unit."""
    food = _food_from_options(category, calories_per_unit, serving_unit, serving_grams)
    payload: dict[str, Any] = {
        "quantity": quantity,
        "unit": unit,
        "display": format_portion(quantity, unit),
        "calories": calculate_calories(quantity, unit, food),
    }
    if target is not None:
        sized = calculate_portion(target, calories_per_portion_unit(unit, food))
        payload["target_portion"] = sized
        payload["target_display"] = format_portion(sized, unit)
    _echo(payload)


@app.command()
def cost(
    quantity: float = typer.Option(..., min=0, help="Daily portion quantity"),
    unit: str = typer.Option(..., help="Portion unit"),
    price: float = typer.Option(..., min=0, help="Package price"),
    package_size: float = typer.Option(..., min=0, help="Package size"),
    package_unit: str = typer.Option(..., help="Package unit: lb, kg, oz, g, cup"),
    category: str = typer.Option("dry", help="dry, wet, raw, treat, supplement"),
    serving_grams: Optional[float] = typer.Option(None, help="Exact grams per serving"),
    period: str = typer.Option("daily", help="daily, weekly, monthly"),
) -> None:
    """Cost of a daily portion over a period."""
    result = calculate_daily_cost(quantity, unit, serving_grams, price, package_size, package_unit, category)
    if result is None:
        _echo({"cost": None, "is_estimate": None})
        return
    try:
        total = calculate_period_cost(result.cost, period)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    _echo(
        {
            "period": period,
            "cost": total,
            "formatted": format_cost(total),
            "is_estimate": result.is_estimate,
            "warning": estimate_warning(result.is_estimate),
        }
    )


def _line_item_from_json(raw: dict[str, Any]) -> MealLineItem:
    food_raw = raw["food"]
    food = FoodItem(
        brand=food_raw.get("brand", ""),
        name=food_raw.get("name", ""),
        category=food_raw["category"],
        calories_per_unit=float(food_raw["calories_per_unit"]),
        serving_unit=food_raw["serving_unit"],
        serving_grams=food_raw.get("serving_grams"),
        id=str(food_raw.get("id", "")),
    )
    unit = raw.get("portion_unit", food.serving_unit)
    quantity = float(raw.get("portion_quantity", 0))
    return MealLineItem(
        food=food,
        portion_quantity=quantity,
        portion_unit=unit,
        calculated_calories=int(raw.get("calculated_calories", calculate_calories(quantity, unit, food))),
        portion_grams=raw.get("portion_grams"),
        manually_adjusted=bool(raw.get("manually_adjusted", False)),
        id=str(raw.get("id", "")),
    )


@app.command()
def redistribute(meal_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Meal JSON file")) -> None:
    """Rebalance a meal's automatic items to its target calories."""
    try:
        data = json.loads(meal_file.read_text(encoding="utf-8"))
        target = float(data["target_calories"])
        items = [_line_item_from_json(raw) for raw in data.get("items", [])]
    except (KeyError, TypeError, ValueError) as exc:
        raise typer.BadParameter(f"invalid meal file: {exc}") from exc

    balanced = redistribute_calories(target, items)
    _echo(
        {
            "target_calories": target,
            "total_calories": meal_total_calories(balanced),
            "items": [
                {
                    "id": item.id,
                    "portion_quantity": item.portion_quantity,
                    "portion_unit": item.portion_unit,
                    "display": format_portion(item.portion_quantity, item.portion_unit),
                    "calculated_calories": item.calculated_calories,
                    "portion_grams": item.portion_grams,
                    "manually_adjusted": item.manually_adjusted,
                }
                for item in balanced
            ],
        }
    )


@app.command("scan-label")
def scan_label(text_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="OCR text file")) -> None:
    """Extract nutrition fields from label text."""
    scan = parse_nutrition_facts(text_file.read_text(encoding="utf-8"))
    payload = asdict(scan)
    payload.pop("raw_text")
    payload["serving_quantity"] = scan.serving_quantity
    _echo(payload)


if __name__ == "__main__":
    app()
