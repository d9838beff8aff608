from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType


@dataclass(frozen=True)
class HealthCondition:
    id: str
    name: str
    species: str
    multiplier: float
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id.strip():
            raise ValueError("condition id cannot be empty")
        if self.species not in ("dog", "cat"):
            raise ValueError("species must be one of: dog, cat")
        if self.multiplier <= 0:
            raise ValueError("multiplier must be greater than 0")


HEALTH_CONDITIONS: tuple[HealthCondition, ...] = (
    HealthCondition("dog-hypothyroid", "Hypothyroidism", "dog", 0.85, "Decreased metabolism due to low thyroid hormone"),
    HealthCondition("dog-ckd-early", "Chronic Kidney Disease (Early Stage)", "dog", 0.95, "Mild reduction in energy needs"),
    HealthCondition("dog-ckd-advanced", "Chronic Kidney Disease (Advanced)", "dog", 0.85, "Significant reduction in energy needs"),
    HealthCondition("dog-diabetes-controlled", "Diabetes (Well-Controlled)", "dog", 1.0, "Standard energy needs with controlled diabetes"),
    HealthCondition("dog-diabetes-uncontrolled", "Diabetes (Uncontrolled)", "dog", 1.1, "Increased energy needs due to poor glucose control"),
    HealthCondition("dog-cushings", "Cushing's Disease", "dog", 0.9, "Slightly reduced energy needs"),
    HealthCondition("dog-cancer-active", "Cancer (Active Treatment)", "dog", 1.2, "Increased energy needs during treatment"),
    HealthCondition("dog-cancer-recovery", "Cancer (Recovery/Remission)", "dog", 1.1, "Moderately increased energy needs"),
    HealthCondition("dog-heart-disease", "Heart Disease", "dog", 0.95, "Slightly reduced energy needs"),
    HealthCondition("cat-hyperthyroid", "Hyperthyroidism", "cat", 1.3, "Increased metabolism and energy needs"),
    HealthCondition("cat-ckd-early", "Chronic Kidney Disease (Early Stage)", "cat", 1.0, "Maintain adequate energy intake"),
    HealthCondition("cat-ckd-advanced", "Chronic Kidney Disease (Advanced)", "cat", 0.95, "Slightly reduced energy needs"),
    HealthCondition("cat-diabetes-controlled", "Diabetes (Well-Controlled)", "cat", 1.0, "Standard energy needs with controlled diabetes"),
    HealthCondition("cat-diabetes-uncontrolled", "Diabetes (Uncontrolled)", "cat", 1.1, "Increased energy needs due to poor glucose control"),
    HealthCondition("cat-ibd", "Inflammatory Bowel Disease", "cat", 1.05, "Slightly increased energy needs"),
    HealthCondition("cat-cancer-active", "Cancer (Active Treatment)", "cat", 1.2, "Increased energy needs during treatment"),
    HealthCondition("cat-cancer-recovery", "Cancer (Recovery/Remission)", "cat", 1.1, "Moderately increased energy needs"),
    HealthCondition("cat-heart-disease", "Heart Disease", "cat", 0.95, "Slightly reduced energy needs"),
)


def multiplier_table(conditions: Iterable[HealthCondition]) -> Mapping[str, float]:
    return MappingProxyType({c.id: c.multiplier for c in conditions})


HEALTH_MULTIPLIERS = multiplier_table(HEALTH_CONDITIONS)


def conditions_for_species(species: str, conditions: Iterable[HealthCondition] = HEALTH_CONDITIONS) -> list[HealthCondition]:
    return [c for c in conditions if c.species == species]


def get_condition(condition_id: str, conditions: Iterable[HealthCondition] = HEALTH_CONDITIONS) -> HealthCondition | None:
    for condition in conditions:
        if condition.id == condition_id:
            return condition
    return None


def load_conditions(path: str | Path) -> tuple[HealthCondition, ...]:
    """Load a condition table from a JSON list of condition objects."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError("condition file must contain a JSON list")
    conditions = []
    for item in data:
        if not isinstance(item, dict):
            raise ValueError("each condition must be a JSON object")
        try:
            conditions.append(
                HealthCondition(
                    id=str(item["id"]),
                    name=str(item.get("name") or item["id"]),
                    species=str(item["species"]),
                    multiplier=float(item["multiplier"]),
                    description=str(item.get("description") or ""),
                )
            )
        except KeyError as exc:
            raise ValueError(f"condition is missing field {exc.args[0]!r}") from exc
    return tuple(conditions)
