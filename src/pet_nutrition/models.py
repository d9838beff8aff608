from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Union

from .units import convert_weight

Species = Literal["dog", "cat"]
WeightUnit = Literal["lb", "kg"]
ActivityCategory = Literal["sedentary", "low", "normal", "active", "highly-active"]
ActivityPace = Literal["slow", "moderate", "fast"]
LifeStage = Literal["young-puppy", "older-puppy", "kitten", "adult", "senior"]
OutdoorExposure = Literal["indoor", "less-than-2", "2-4", "4-8", "8-12", "12-plus"]
Climate = Literal["mild", "cold", "hot"]
BodyConditionScore = Literal["1-2", "3", "4-5", "6-7", "8-9"]
WeightGoal = Literal["maintain", "gain", "lose"]
HealthStatus = Literal["healthy", "has-conditions"]
FoodCategory = Literal["dry", "wet", "raw", "treat", "supplement"]
ServingUnit = Literal["cup", "can", "oz", "g", "piece", "scoop", "pump"]

SPECIES = ("dog", "cat")
WEIGHT_UNITS = ("lb", "kg")
ACTIVITY_CATEGORIES = ("sedentary", "low", "normal", "active", "highly-active")
ACTIVITY_PACES = ("slow", "moderate", "fast")
OUTDOOR_EXPOSURES = ("indoor", "less-than-2", "2-4", "4-8", "8-12", "12-plus")
INDOOR_EXPOSURES = ("indoor", "less-than-2")
CLIMATES = ("mild", "cold", "hot")
BCS_BANDS = ("1-2", "3", "4-5", "6-7", "8-9")
WEIGHT_GOALS = ("maintain", "gain", "lose")
FOOD_CATEGORIES = ("dry", "wet", "raw", "treat", "supplement")
SERVING_UNITS = ("cup", "can", "oz", "g", "piece", "scoop", "pump")


@dataclass(frozen=True)
class StepsActivity:
    """Activity described by an average daily step count."""

    daily_steps: int

    def __post_init__(self) -> None:
        if self.daily_steps < 0:
            raise ValueError("daily_steps must be >= 0")

    @property
    def method(self) -> str:
        return "steps"


@dataclass(frozen=True)
class TimeActivity:
    """Activity described by daily exercise minutes and pace.

    Zero minutes is a measurement and lands in the lowest tier; only a
    missing activity falls back to Normal.
    """

    minutes: float
    pace: ActivityPace = "moderate"

    def __post_init__(self) -> None:
        if self.minutes < 0:
            raise ValueError("minutes must be >= 0")
        if self.pace not in ACTIVITY_PACES:
            raise ValueError("pace must be one of: slow, moderate, fast")

    @property
    def method(self) -> str:
        return "time"


@dataclass(frozen=True)
class CategoryActivity:
    """Activity picked directly from the five activity tiers."""

    category: ActivityCategory

    def __post_init__(self) -> None:
        if self.category not in ACTIVITY_CATEGORIES:
            raise ValueError(f"category must be one of: {', '.join(ACTIVITY_CATEGORIES)}")

    @property
    def method(self) -> str:
        return "categories"


ActivityInput = Union[StepsActivity, TimeActivity, CategoryActivity]


@dataclass(frozen=True)
class PetProfile:
    """Snapshot of everything the energy calculator needs about a pet."""

    species: Species
    weight: float
    weight_unit: WeightUnit = "kg"
    neutered: bool = True
    activity: ActivityInput | None = None
    life_stage: LifeStage = "adult"
    outdoor_exposure: OutdoorExposure = "indoor"
    climate: Climate | None = None
    bcs: BodyConditionScore = "4-5"
    weight_goal: WeightGoal = "maintain"
    health_status: HealthStatus = "healthy"
    health_conditions: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.species not in SPECIES:
            raise ValueError("species must be one of: dog, cat")
        if self.weight <= 0:
            raise ValueError("weight must be greater than 0")
        if self.weight_unit not in WEIGHT_UNITS:
            raise ValueError("weight_unit must be one of: lb, kg")
        if self.outdoor_exposure not in OUTDOOR_EXPOSURES:
            raise ValueError(f"outdoor_exposure must be one of: {', '.join(OUTDOOR_EXPOSURES)}")
        if self.outdoor_exposure not in INDOOR_EXPOSURES and self.climate is None:
            raise ValueError("climate is required when the pet spends 2 or more hours outdoors")
        if self.climate is not None and self.climate not in CLIMATES:
            raise ValueError("climate must be one of: mild, cold, hot")
        if self.bcs not in BCS_BANDS:
            raise ValueError(f"bcs must be one of: {', '.join(BCS_BANDS)}")
        if self.weight_goal not in WEIGHT_GOALS:
            raise ValueError("weight_goal must be one of: maintain, gain, lose")
        if self.health_status not in ("healthy", "has-conditions"):
            raise ValueError("health_status must be one of: healthy, has-conditions")

    @property
    def weight_kg(self) -> float:
        return convert_weight(self.weight, self.weight_unit, "kg")


@dataclass(frozen=True)
class MultiplierDetail:
    value: float
    label: str

    def __post_init__(self) -> None:
        if not self.value > 0:
            raise ValueError("multiplier value must be greater than 0")


@dataclass(frozen=True)
class CalculationBreakdown:
    baseline: MultiplierDetail
    activity: MultiplierDetail
    life_stage: MultiplierDetail
    environment: MultiplierDetail
    body_condition: MultiplierDetail
    health: MultiplierDetail

    def rows(self) -> list[tuple[str, MultiplierDetail]]:
        return [
            ("baseline", self.baseline),
            ("activity", self.activity),
            ("life_stage", self.life_stage),
            ("environment", self.environment),
            ("body_condition", self.body_condition),
            ("health", self.health),
        ]

    def product(self) -> float:
        return math.prod(detail.value for _, detail in self.rows())


@dataclass(frozen=True)
class CalculationResult:
    """MER calculation output.

    ``rer`` and ``multiplier`` are display values; ``rer_exact`` and
    ``multiplier_exact`` are what ``mer`` was computed from.
    """

    rer: int
    rer_exact: float
    multiplier: float
    multiplier_exact: float
    mer: int
    breakdown: CalculationBreakdown


@dataclass(frozen=True)
class FoodItem:
    """A food with its calorie density per one ``serving_unit``."""

    brand: str
    name: str
    category: FoodCategory
    calories_per_unit: float
    serving_unit: ServingUnit
    serving_grams: float | None = None
    package_price: float | None = None
    package_size: float | None = None
    package_unit: str | None = None
    protein_percent: float | None = None
    fat_percent: float | None = None
    id: str = ""

    def __post_init__(self) -> None:
        if self.category not in FOOD_CATEGORIES:
            raise ValueError(f"category must be one of: {', '.join(FOOD_CATEGORIES)}")
        if self.serving_unit not in SERVING_UNITS:
            raise ValueError(f"serving_unit must be one of: {', '.join(SERVING_UNITS)}")
        if self.calories_per_unit < 0:
            raise ValueError("calories_per_unit must be >= 0")
        if self.serving_grams is not None and self.serving_grams <= 0:
            raise ValueError("serving_grams must be greater than 0")


@dataclass(frozen=True)
class MealLineItem:
    food: FoodItem
    portion_quantity: float
    portion_unit: str
    calculated_calories: int
    portion_grams: int | None = None
    manually_adjusted: bool = False
    id: str = ""

    @property
    def calories_per_unit(self) -> float:
        return self.food.calories_per_unit


@dataclass(frozen=True)
class Meal:
    name: str
    target_percent: float
    target_calories: int
    items: tuple[MealLineItem, ...] = ()
    sort_order: int = 0


@dataclass(frozen=True)
class GramsResult:
    grams: float
    is_estimate: bool


@dataclass(frozen=True)
class CostPerGram:
    cost_per_gram: float
    is_estimate: bool


@dataclass(frozen=True)
class CostResult:
    cost: float
    is_estimate: bool
