from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from .health import HEALTH_MULTIPLIERS
from .models import (
    INDOOR_EXPOSURES,
    CalculationBreakdown,
    CalculationResult,
    CategoryActivity,
    MultiplierDetail,
    PetProfile,
    StepsActivity,
    TimeActivity,
)
from .units import round_half_up

logger = logging.getLogger(__name__)

# Baseline coefficients by species and reproductive status.
BASELINE_FACTORS = MappingProxyType(
    {
        "dog": {"neutered": 1.6, "intact": 1.8},
        "cat": {"neutered": 1.2, "intact": 1.4},
    }
)

# Five activity tiers, lowest first.
ACTIVITY_TIERS: tuple[MultiplierDetail, ...] = (
    MultiplierDetail(0.75, "Sedentary"),
    MultiplierDetail(0.9, "Low"),
    MultiplierDetail(1.0, "Normal"),
    MultiplierDetail(1.15, "Active"),
    MultiplierDetail(1.25, "Highly Active"),
)
ACTIVITY_FACTORS = MappingProxyType(
    dict(zip(("sedentary", "low", "normal", "active", "highly-active"), ACTIVITY_TIERS))
)
DEFAULT_ACTIVITY = ACTIVITY_TIERS[2]

# Upper bounds (exclusive) of the four lower tiers.
STEP_BREAKPOINTS = MappingProxyType(
    {
        "dog": (3000, 7000, 10000, 13000),
        "cat": (1000, 2500, 4000, 6000),
    }
)
MINUTE_BREAKPOINTS = MappingProxyType(
    {
        "dog": (15, 30, 45, 60),
        "cat": (10, 20, 30, 45),
    }
)
PACE_FACTORS = MappingProxyType({"slow": 0.8, "moderate": 1.0, "fast": 1.2})

LIFE_STAGE_FACTORS = MappingProxyType(
    {
        "dog": {
            "young-puppy": MultiplierDetail(1.875, "Young Puppy (0-4mo)"),
            "older-puppy": MultiplierDetail(1.25, "Older Puppy (4-12mo)"),
            "adult": MultiplierDetail(1.0, "Adult"),
            "senior": MultiplierDetail(0.95, "Senior"),
        },
        "cat": {
            "kitten": MultiplierDetail(2.08, "Kitten"),
            "adult": MultiplierDetail(1.0, "Adult"),
            "senior": MultiplierDetail(0.95, "Senior"),
        },
    }
)
DEFAULT_LIFE_STAGE = MultiplierDetail(1.0, "Adult")

# Hours outdoors x climate.
ENVIRONMENT_FACTORS = MappingProxyType(
    {
        "2-4": {"mild": 1.0, "cold": 1.05, "hot": 1.0},
        "4-8": {"mild": 1.05, "cold": 1.15, "hot": 1.05},
        "8-12": {"mild": 1.1, "cold": 1.25, "hot": 1.1},
        "12-plus": {"mild": 1.15, "cold": 1.4, "hot": 1.15},
    }
)
LONG_COAT_COLD_REDUCTION = 0.2
INDOOR = MultiplierDetail(1.0, "Indoor")

BODY_CONDITION_FACTORS = MappingProxyType(
    {
        "1-2": MultiplierDetail(1.2, "Severely Underweight"),
        "3": MultiplierDetail(1.1, "Underweight"),
        "4-5": MultiplierDetail(1.0, "Ideal"),
        "6-7": MultiplierDetail(0.9, "Overweight"),
        "8-9": MultiplierDetail(0.8, "Obese"),
    }
)
BODY_CONDITION_MIN = 0.7
BODY_CONDITION_MAX = 1.2
WEIGHT_GOAL_STEP = 0.1

HEALTHY = MultiplierDetail(1.0, "Healthy")


def calculate_rer(weight_kg: float) -> float:
    """Calculate Resting Energy Requirement (RER)."""
    return 70 * (weight_kg**0.75)


def _tier_for(amount: float, breakpoints: tuple[float, ...]) -> MultiplierDetail:
    for tier, upper in zip(ACTIVITY_TIERS, breakpoints):
        if amount < upper:
            return tier
    return ACTIVITY_TIERS[-1]


def baseline_multiplier(profile: PetProfile) -> MultiplierDetail:
    status = "neutered" if profile.neutered else "intact"
    value = BASELINE_FACTORS[profile.species][status]
    return MultiplierDetail(value, f"{status.capitalize()} {profile.species.capitalize()}")


def activity_multiplier(profile: PetProfile) -> MultiplierDetail:
    activity = profile.activity
    if isinstance(activity, CategoryActivity):
        return ACTIVITY_FACTORS[activity.category]
    if isinstance(activity, StepsActivity):
        return _tier_for(activity.daily_steps, STEP_BREAKPOINTS[profile.species])
    if isinstance(activity, TimeActivity):
        adjusted = activity.minutes * PACE_FACTORS[activity.pace]
        return _tier_for(adjusted, MINUTE_BREAKPOINTS[profile.species])
    logger.debug("No activity description, using %s", DEFAULT_ACTIVITY.label)
    return DEFAULT_ACTIVITY


def life_stage_multiplier(profile: PetProfile) -> MultiplierDetail:
    detail = LIFE_STAGE_FACTORS[profile.species].get(profile.life_stage)
    if detail is None:
        logger.debug("Unknown %s life stage %r, using adult", profile.species, profile.life_stage)
        return DEFAULT_LIFE_STAGE
    return detail


def environment_multiplier(profile: PetProfile, is_long_haired: bool = False) -> MultiplierDetail:
    if profile.outdoor_exposure in INDOOR_EXPOSURES or profile.climate is None:
        return INDOOR

    value = ENVIRONMENT_FACTORS.get(profile.outdoor_exposure, {}).get(profile.climate, 1.0)
    if profile.climate == "cold" and is_long_haired:
        value -= (value - 1.0) * LONG_COAT_COLD_REDUCTION
    return MultiplierDetail(value, f"{profile.climate.capitalize()} Climate")


def body_condition_multiplier(profile: PetProfile) -> MultiplierDetail:
    base = BODY_CONDITION_FACTORS[profile.bcs]
    value = base.value
    if profile.weight_goal == "gain" and profile.bcs != "8-9":
        value = min(value + WEIGHT_GOAL_STEP, BODY_CONDITION_MAX)
    if profile.weight_goal == "lose" and profile.bcs != "1-2":
        value = max(value - WEIGHT_GOAL_STEP, BODY_CONDITION_MIN)
    return MultiplierDetail(value, base.label)


def health_multiplier(profile: PetProfile, condition_multipliers: Mapping[str, float] | None = None) -> MultiplierDetail:
    if profile.health_status == "healthy" or not profile.health_conditions:
        return HEALTHY

    table = HEALTH_MULTIPLIERS if condition_multipliers is None else condition_multipliers
    values = []
    for condition_id in profile.health_conditions:
        if condition_id not in table:
            logger.debug("Unknown health condition %r, using 1.0", condition_id)
        values.append(table.get(condition_id, 1.0))
    return MultiplierDetail(sum(values) / len(values), "Health Conditions")


def calculate_mer(
    profile: PetProfile,
    is_long_haired: bool = False,
    condition_multipliers: Mapping[str, float] | None = None,
) -> CalculationResult:
    """Calculate Maintenance Energy Requirement (MER).

    MER is RER times the product of six factors. The unrounded RER and
    multiplier feed the product; rounded copies are kept for display.
    """
    rer = calculate_rer(profile.weight_kg)
    breakdown = CalculationBreakdown(
        baseline=baseline_multiplier(profile),
        activity=activity_multiplier(profile),
        life_stage=life_stage_multiplier(profile),
        environment=environment_multiplier(profile, is_long_haired),
        body_condition=body_condition_multiplier(profile),
        health=health_multiplier(profile, condition_multipliers),
    )
    multiplier = breakdown.product()
    mer = round_half_up(rer * multiplier)
    logger.debug("RER %.2f x multiplier %.4f = MER %d", rer, multiplier, mer)

    return CalculationResult(
        rer=round_half_up(rer),
        rer_exact=rer,
        multiplier=round_half_up(multiplier * 100) / 100,
        multiplier_exact=multiplier,
        mer=mer,
        breakdown=breakdown,
    )
