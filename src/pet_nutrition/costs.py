"""Cost analytics.

Every figure carries an ``is_estimate`` flag. A figure is an estimate when
any mass conversion behind it was approximate (cup volumes, unknown units),
and the flag is OR'd through every step so callers can warn the user.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal

from .models import CostPerGram, CostResult, GramsResult, MealLineItem
from .units import cup_grams, round_half_up

logger = logging.getLogger(__name__)

Period = Literal["daily", "weekly", "monthly"]

# Exact mass conversions to grams.
GRAMS_PER_MASS_UNIT = MappingProxyType(
    {
        "lb": 453.592,
        "kg": 1000.0,
        "oz": 28.3495,
        "g": 1.0,
    }
)

# A month is a fixed 30 days, not calendar-accurate.
PERIOD_DAYS = MappingProxyType({"daily": 1, "weekly": 7, "monthly": 30})

ESTIMATE_WARNING = (
    "⚠️ Cost is estimated due to unit conversions. Add serving_grams to items for more accuracy."
)


@dataclass(frozen=True)
class ItemCost:
    item_id: str
    name: str
    brand: str
    category: str
    daily_cost: float
    is_estimate: bool


@dataclass(frozen=True)
class CostSummary:
    period: str
    total: float
    items: list[ItemCost]
    daily_by_category: dict[str, float] = field(default_factory=dict)
    has_estimates: bool = False

    def category_percent(self) -> dict[str, float]:
        daily_total = sum(self.daily_by_category.values())
        if daily_total == 0:
            return {}
        return {category: cost / daily_total * 100 for category, cost in self.daily_by_category.items()}


def convert_to_grams(size: float, unit: str, category: str | None = None) -> GramsResult:
    normalized = unit.lower()
    if normalized in GRAMS_PER_MASS_UNIT:
        return GramsResult(size * GRAMS_PER_MASS_UNIT[normalized], False)
    if normalized == "cup":
        return GramsResult(size * cup_grams(category), True)
    logger.debug("Unknown unit %r, using size as grams", unit)
    return GramsResult(size, True)


def calculate_cost_per_gram(
    price: float,
    package_size: float,
    package_unit: str,
    category: str | None = None,
) -> CostPerGram:
    converted = convert_to_grams(package_size, package_unit, category)
    if converted.grams <= 0:
        return CostPerGram(0.0, True)
    return CostPerGram(price / converted.grams, converted.is_estimate)


def calculate_daily_cost(
    portion_quantity: float,
    portion_unit: str,
    serving_grams: float | None,
    package_price: float | None,
    package_size: float | None,
    package_unit: str | None,
    category: str | None,
) -> CostResult | None:
    """Cost of one day's portion, or None when the package data is incomplete.

    None means the cost is unknown, not zero.
    """
    if not package_price or not package_size or not package_unit:
        return None

    if serving_grams and portion_unit == "cup":
        grams = serving_grams * portion_quantity
        portion_estimate = False
    elif portion_unit == "g":
        grams = portion_quantity
        portion_estimate = False
    else:
        converted = convert_to_grams(portion_quantity, portion_unit, category)
        grams = converted.grams
        portion_estimate = converted.is_estimate

    per_gram = calculate_cost_per_gram(package_price, package_size, package_unit, category)
    return CostResult(
        cost=grams * per_gram.cost_per_gram,
        is_estimate=portion_estimate or per_gram.is_estimate,
    )


def calculate_period_cost(daily_cost: float, period: Period) -> float:
    if period not in PERIOD_DAYS:
        raise ValueError("period must be one of: daily, weekly, monthly")
    return daily_cost * PERIOD_DAYS[period]


def format_cost(cost: float, show_cents: bool = True) -> str:
    if show_cents:
        return f"${cost:.2f}"
    return f"${round_half_up(cost)}"


def estimate_warning(is_estimate: bool) -> str | None:
    return ESTIMATE_WARNING if is_estimate else None


def item_daily_cost(item: MealLineItem) -> CostResult | None:
    food = item.food
    return calculate_daily_cost(
        item.portion_quantity,
        item.portion_unit,
        food.serving_grams,
        food.package_price,
        food.package_size,
        food.package_unit,
        food.category,
    )


def summarize_costs(items: Sequence[MealLineItem], period: Period = "daily") -> CostSummary:
    """Cost breakdown for every line item of a pet's meals.

    Items whose cost is unknowable are left out of the totals.
    """
    costs: list[ItemCost] = []
    by_category: dict[str, float] = {}
    has_estimates = False
    for item in items:
        result = item_daily_cost(item)
        if result is None:
            continue
        food = item.food
        costs.append(
            ItemCost(
                item_id=item.id or food.id,
                name=food.name,
                brand=food.brand,
                category=food.category,
                daily_cost=result.cost,
                is_estimate=result.is_estimate,
            )
        )
        by_category[food.category] = by_category.get(food.category, 0.0) + result.cost
        has_estimates = has_estimates or result.is_estimate

    costs.sort(key=lambda c: -c.daily_cost)
    daily_total = sum(c.daily_cost for c in costs)
    return CostSummary(
        period=period,
        total=calculate_period_cost(daily_total, period),
        items=costs,
        daily_by_category=by_category,
        has_estimates=has_estimates,
    )
