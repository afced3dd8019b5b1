"""Tests for portion resolution and nutrient scaling."""

import logging

import pytest

from nutrition_engine.adapters.in_memory_measures import InMemoryMeasureCatalog
from nutrition_engine.domain.foods import Food, FoodMeasureConversion, PortionResolution
from nutrition_engine.services.portions import (
    PortionService,
    calories_from_macros,
    validate_food_nutrition,
)
from tests.conftest import CUP_ID, TABLESPOON_ID, UNIT_ID, make_food


def test_food_conversion_takes_priority_over_generic_measure(
    portion_service: PortionService,
) -> None:
    result = portion_service.resolve_portion(make_food(), 2, TABLESPOON_ID)

    assert result.grams == 30
    assert result.resolution is PortionResolution.FOOD_CONVERSION
    assert result.used_fallback is False


def test_food_conversion_scales_by_conversion_quantity(
    portion_service: PortionService,
) -> None:
    portion_service.catalog.add_conversion(
        FoodMeasureConversion(food_id=1, measure_id=UNIT_ID, quantity=2, grams=30)
    )

    result = portion_service.resolve_portion(make_food(), 3, UNIT_ID)

    assert result.grams == 45


def test_generic_measure_uses_grams_equivalent(
    portion_service: PortionService,
) -> None:
    food = make_food(id=2)

    result = portion_service.resolve_portion(food, 2, TABLESPOON_ID)

    assert result.grams == 50
    assert result.resolution is PortionResolution.HOUSEHOLD_MEASURE


def test_inactive_measure_still_resolves(portion_service: PortionService) -> None:
    result = portion_service.resolve_portion(make_food(id=2), 1, CUP_ID)

    assert result.grams == 160


def test_measure_without_grams_falls_back_to_default_portion(
    portion_service: PortionService,
) -> None:
    food = make_food(id=3, portion_size=None)

    result = portion_service.resolve_portion(food, 3, UNIT_ID)

    assert result.grams == 300
    assert result.used_fallback is True
    assert result.resolution is PortionResolution.PORTION_FALLBACK


def test_measure_without_grams_uses_food_portion_size(
    portion_service: PortionService,
) -> None:
    food = make_food(id=3, portion_size=50)

    result = portion_service.resolve_portion(food, 3, UNIT_ID)

    assert result.grams == 150
    assert result.used_fallback is True


def test_fallback_uses_configured_default(catalog: InMemoryMeasureCatalog) -> None:
    service = PortionService(catalog, default_portion_grams=80)

    result = service.resolve_portion(make_food(id=3), 2, UNIT_ID)

    assert result.grams == 160


def test_unknown_measure_is_not_found(
    portion_service: PortionService,
    caplog: pytest.LogCaptureFixture,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(logging.getLogger("nutrition_engine"), "propagate", True)
    with caplog.at_level(logging.WARNING):
        result = portion_service.resolve_portion(make_food(), 2, 999)

    assert result.grams == 0
    assert result.calories == 0
    assert result.not_found is True
    assert result.used_fallback is False
    assert "Unknown household measure" in caplog.text


@pytest.mark.parametrize("measure_ref", [None, "g", "grams", "GRAM"])
def test_gram_quantities_are_used_directly(
    portion_service: PortionService, measure_ref: str | None
) -> None:
    result = portion_service.resolve_portion(make_food(), 150, measure_ref)

    assert result.grams == 150
    assert result.resolution is PortionResolution.GRAMS


@pytest.mark.parametrize("quantity", [0, -1, None])
def test_non_positive_quantity_gives_empty_portion(
    portion_service: PortionService, quantity: float | None
) -> None:
    result = portion_service.resolve_portion(make_food(), quantity, TABLESPOON_ID)

    assert result.resolution is PortionResolution.EMPTY
    assert result.grams == 0
    assert result.calories == 0
    assert result.protein == 0
    assert result.carbs == 0
    assert result.fat == 0


def test_calories_are_derived_from_macros_not_stored_value(
    portion_service: PortionService,
) -> None:
    food = Food(id=9, name="Test", protein=10, carbs=20, fat=5, calories=500)

    result = portion_service.resolve_portion(food, 100)

    assert result.calories == 165


def test_nutrients_scale_with_grams(portion_service: PortionService) -> None:
    result = portion_service.resolve_portion(make_food(), 2, TABLESPOON_ID)

    assert result.protein == pytest.approx(0.75)
    assert result.carbs == pytest.approx(8.4)
    assert result.fat == pytest.approx(0.09)
    assert result.calories == pytest.approx(37.41)
    assert result.fiber == pytest.approx(0.48)
    assert result.sodium == pytest.approx(0.3)


def test_missing_fiber_and_sodium_stay_missing(
    portion_service: PortionService,
) -> None:
    food = make_food(fiber=None, sodium=None)

    result = portion_service.resolve_portion(food, 100)

    assert result.fiber is None
    assert result.sodium is None


def test_values_are_rounded_to_configured_decimals(
    catalog: InMemoryMeasureCatalog,
) -> None:
    service = PortionService(catalog, decimals=1)
    food = Food(id=9, name="Test", protein=3.33, carbs=0, fat=0)

    totals = service.calculate_nutrition(food, 100)

    assert totals.protein == 3.3
    assert totals.calories == 13.3


def test_sum_portions_adds_meal_totals(portion_service: PortionService) -> None:
    food = Food(id=9, name="Test", protein=10, carbs=20, fat=5, fiber=2)
    portions = [
        portion_service.resolve_portion(food, 100),
        portion_service.resolve_portion(food, 50),
    ]

    totals = portion_service.sum_portions(portions)

    assert totals.grams == 150
    assert totals.protein == 15
    assert totals.calories == pytest.approx(247.5)
    assert totals.fiber == 3
    assert totals.sodium is None


def test_calories_from_macros() -> None:
    assert calories_from_macros(10, 20, 5) == 165


def test_validate_food_nutrition_accepts_small_rounding() -> None:
    food = Food(id=9, name="Test", protein=10, carbs=20, fat=5, calories=165.4)

    check = validate_food_nutrition(food)

    assert check.is_valid is True
    assert check.calculated_calories == 165


def test_validate_food_nutrition_flags_mismatch() -> None:
    food = Food(id=9, name="Test", protein=10, carbs=20, fat=5, calories=150)

    check = validate_food_nutrition(food)

    assert check.is_valid is False
    assert check.difference == pytest.approx(15)