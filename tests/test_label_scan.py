from pet_nutrition.label_scan import parse_nutrition_facts

LABEL = """
Acme Pet Foods
Chicken & Rice Formula

Crude Protein: 26%
Crude Fat: 16%
Crude Fiber: 4.5%
Moisture: 10%
Calories: 380 kcal per cup
Serving size: 1 cup
"""


def test_parse_full_label() -> None:
    scan = parse_nutrition_facts(LABEL)
    assert scan.brand == "Acme Pet Foods"
    assert scan.product_name == "Chicken & Rice Formula"
    assert scan.calories == 380
    assert scan.protein == 26.0
    assert scan.fat == 16.0
    assert scan.fiber == 4.5
    assert scan.moisture == 10.0
    assert scan.serving_size == "1"
    assert scan.serving_unit == "cup"
    assert scan.serving_quantity == 1.0
    assert scan.confidence == "high"
    assert scan.raw_text == LABEL


def test_parse_sparse_label_is_low_confidence() -> None:
    scan = parse_nutrition_facts("Some Brand\nProtein 20%")
    assert scan.protein == 20.0
    assert scan.calories is None
    assert scan.serving_unit is None
    assert scan.serving_quantity is None
    assert scan.confidence == "low"


def test_parse_serving_unit_is_lowercased() -> None:
    scan = parse_nutrition_facts("BRAND\nSTEW\nSERVING SIZE: 3 OZ\nKCAL 95")
    assert scan.serving_size == "3"
    assert scan.serving_unit == "oz"
    assert scan.calories == 95
    assert scan.confidence == "high"


def test_parse_empty_text() -> None:
    scan = parse_nutrition_facts("")
    assert scan.brand == ""
    assert scan.product_name == ""
    assert scan.calories is None
    assert scan.confidence == "low"
