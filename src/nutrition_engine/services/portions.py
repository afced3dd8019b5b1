"""Portion resolution and nutrient scaling."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from nutrition_engine.domain.foods import (
    Food,
    FoodMeasureConversion,
    HouseholdMeasure,
    NutrientTotals,
    NutritionCheck,
    PortionResolution,
    PortionResult,
)

GRAM_REFS = frozenset({"g", "gram", "grams"})
CALORIE_TOLERANCE_KCAL = 1.0

_logger = logging.getLogger(__name__)


class MeasureCatalog(Protocol):
    """Lookup interface for household measures and food conversions."""

    def get_measure(self, measure_id: int | str) -> HouseholdMeasure | None:
        """Return a generic measure by id, if present."""

    def get_conversion(
        self, food_id: int | str, measure_id: int | str
    ) -> FoodMeasureConversion | None:
        """Return the food-specific conversion for a measure, if present."""

    def list_conversions(self, food_id: int | str) -> list[FoodMeasureConversion]:
        """Return every conversion registered for a food."""


@dataclass
class PortionService:
    """Resolves household portions into grams and nutrients."""

    catalog: MeasureCatalog
    default_portion_grams: float = 100.0
    decimals: int = 2
    debug: bool = False

    def resolve_portion(
        self, food: Food, quantity: float, measure_ref: int | str | None = None
    ) -> PortionResult:
        """Resolve ``quantity`` of ``measure_ref`` into grams and nutrients.

        The gram mass comes from the first applicable source: plain grams, the
        food-specific conversion, the generic measure's ``grams_equivalent``,
        then the food's portion size (flagged as a fallback). A measure id
        that matches nothing yields zero grams with ``NOT_FOUND``.
        """
        if quantity is None or quantity <= 0:
            return self._result(food, 0.0, PortionResolution.EMPTY)

        grams, resolution = self._resolve_grams(food, quantity, measure_ref)
        result = self._result(food, grams, resolution)
        if self.debug:
            _logger.info(
                "Resolved portion: food=%s quantity=%s measure=%s grams=%s via=%s",
                food.id,
                quantity,
                measure_ref,
                result.grams,
                resolution.value,
            )
        return result

    def calculate_nutrition(self, food: Food, grams: float) -> NutrientTotals:
        """Scale a food's per-100g profile to ``grams``."""
        if grams is None or grams <= 0:
            return NutrientTotals(
                grams=0.0,
                calories=0.0,
                protein=0.0,
                carbs=0.0,
                fat=0.0,
                fiber=None if food.fiber is None else 0.0,
                sodium=None if food.sodium is None else 0.0,
            )
        multiplier = grams / 100
        protein = (food.protein or 0.0) * multiplier
        carbs = (food.carbs or 0.0) * multiplier
        fat = (food.fat or 0.0) * multiplier
        return NutrientTotals(
            grams=self._round(grams),
            calories=self._round(calories_from_macros(protein, carbs, fat)),
            protein=self._round(protein),
            carbs=self._round(carbs),
            fat=self._round(fat),
            fiber=None if food.fiber is None else self._round(food.fiber * multiplier),
            sodium=(
                None if food.sodium is None else self._round(food.sodium * multiplier)
            ),
        )

    def sum_portions(self, portions: Iterable[PortionResult]) -> NutrientTotals:
        """Add up portions of a meal, re-deriving calories from the macros."""
        grams = protein = carbs = fat = 0.0
        fiber: float | None = None
        sodium: float | None = None
        for portion in portions:
            grams += portion.grams
            protein += portion.protein
            carbs += portion.carbs
            fat += portion.fat
            if portion.fiber is not None:
                fiber = (fiber or 0.0) + portion.fiber
            if portion.sodium is not None:
                sodium = (sodium or 0.0) + portion.sodium
        return NutrientTotals(
            grams=self._round(grams),
            calories=self._round(calories_from_macros(protein, carbs, fat)),
            protein=self._round(protein),
            carbs=self._round(carbs),
            fat=self._round(fat),
            fiber=None if fiber is None else self._round(fiber),
            sodium=None if sodium is None else self._round(sodium),
        )

    def _resolve_grams(
        self, food: Food, quantity: float, measure_ref: int | str | None
    ) -> tuple[float, PortionResolution]:
        if measure_ref is None or str(measure_ref).lower() in GRAM_REFS:
            return quantity, PortionResolution.GRAMS

        conversion = self.catalog.get_conversion(food.id, measure_ref)
        if conversion is not None and conversion.quantity > 0:
            grams = conversion.grams * quantity / conversion.quantity
            return max(grams, 0.0), PortionResolution.FOOD_CONVERSION

        measure = self.catalog.get_measure(measure_ref)
        if measure is None:
            _logger.warning(
                "Unknown household measure: food=%s measure=%s", food.id, measure_ref
            )
            return 0.0, PortionResolution.NOT_FOUND

        if measure.grams_equivalent:
            grams = measure.grams_equivalent * quantity
            return max(grams, 0.0), PortionResolution.HOUSEHOLD_MEASURE

        per_unit = food.portion_size or self.default_portion_grams
        _logger.debug(
            "Portion fallback: food=%s measure=%s grams_per_unit=%s",
            food.id,
            measure_ref,
            per_unit,
        )
        return max(per_unit * quantity, 0.0), PortionResolution.PORTION_FALLBACK

    def _result(
        self, food: Food, grams: float, resolution: PortionResolution
    ) -> PortionResult:
        totals = self.calculate_nutrition(food, grams)
        return PortionResult(
            grams=totals.grams,
            calories=totals.calories,
            protein=totals.protein,
            carbs=totals.carbs,
            fat=totals.fat,
            fiber=totals.fiber,
            sodium=totals.sodium,
            resolution=resolution,
        )

    def _round(self, value: float) -> float:
        return round(value, self.decimals)


def calories_from_macros(protein: float, carbs: float, fat: float) -> float:
    """Return calories implied by macronutrient grams (4/4/9 kcal per gram)."""
    return protein * 4 + carbs * 4 + fat * 9


def validate_food_nutrition(food: Food) -> NutritionCheck:
    """Compare a food's stored calories with the calories of its macros."""
    stored = food.calories or 0.0
    calculated = calories_from_macros(
        food.protein or 0.0, food.carbs or 0.0, food.fat or 0.0
    )
    difference = abs(stored - calculated)
    return NutritionCheck(
        is_valid=difference < CALORIE_TOLERANCE_KCAL,
        stored_calories=stored,
        calculated_calories=calculated,
        difference=difference,
    )
