import json
from pathlib import Path

import pytest

from pet_nutrition.health import (
    HEALTH_CONDITIONS,
    HEALTH_MULTIPLIERS,
    conditions_for_species,
    get_condition,
    load_conditions,
    multiplier_table,
)


def test_builtin_catalogue() -> None:
    assert len(HEALTH_CONDITIONS) == 18
    assert len(conditions_for_species("dog")) == 9
    assert len(conditions_for_species("cat")) == 9
    assert all(c.species == "cat" for c in conditions_for_species("cat"))


def test_get_condition() -> None:
    hyper = get_condition("cat-hyperthyroid")
    assert hyper is not None
    assert hyper.name == "Hyperthyroidism"
    assert hyper.multiplier == 1.3
    assert get_condition("dog-hypothyroid").multiplier == 0.85
    assert get_condition("missing") is None


def test_multiplier_table_is_read_only() -> None:
    assert HEALTH_MULTIPLIERS["cat-ibd"] == 1.05
    with pytest.raises(TypeError):
        HEALTH_MULTIPLIERS["cat-ibd"] = 2.0


def test_load_conditions(tmp_path: Path) -> None:
    path = tmp_path / "conditions.json"
    path.write_text(
        json.dumps(
            [
                {"id": "dog-allergy", "name": "Allergy", "species": "dog", "multiplier": 1.05},
                {"id": "cat-obesity", "species": "cat", "multiplier": "0.8", "description": "Diet plan"},
            ]
        ),
        encoding="utf-8",
    )
    conditions = load_conditions(path)
    assert [c.id for c in conditions] == ["dog-allergy", "cat-obesity"]
    assert conditions[1].name == "cat-obesity"
    assert multiplier_table(conditions) == {"dog-allergy": 1.05, "cat-obesity": 0.8}


@pytest.mark.parametrize(
    "payload",
    [
        {"id": "x"},
        [{"id": "dog-x", "species": "dog"}],
        [{"id": "dog-x", "species": "horse", "multiplier": 1.0}],
        [{"id": "dog-x", "species": "dog", "multiplier": 0}],
        ["dog-x"],
    ],
)
def test_load_conditions_rejects_bad_files(tmp_path: Path, payload) -> None:
    path = tmp_path / "conditions.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(ValueError):
        load_conditions(path)
