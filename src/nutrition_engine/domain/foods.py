"""Domain models for foods, household measures and portions."""

from dataclasses import dataclass
from enum import Enum


class MeasureCategory(str, Enum):
    """Kind of household measure."""

    VOLUME = "volume"
    WEIGHT = "weight"
    UNIT = "unit"
    OTHER = "other"


class PortionResolution(str, Enum):
    """How a portion's gram mass was obtained."""

    EMPTY = "empty"
    GRAMS = "grams"
    FOOD_CONVERSION = "food_conversion"
    HOUSEHOLD_MEASURE = "household_measure"
    PORTION_FALLBACK = "portion_fallback"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Food:
    """Per-100g nutrient profile of a food."""

    id: int | str
    name: str
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float | None = None
    sodium: float | None = None
    calories: float | None = None
    portion_size: float | None = None


@dataclass(frozen=True)
class HouseholdMeasure:
    """Generic household measure shared by all foods."""

    id: int | str
    name: str
    category: MeasureCategory = MeasureCategory.OTHER
    grams_equivalent: float | None = None
    ml_equivalent: float | None = None
    order_index: int = 0
    is_active: bool = True


@dataclass(frozen=True)
class FoodMeasureConversion:
    """Food-specific weight of a household measure."""

    food_id: int | str
    measure_id: int | str
    grams: float
    quantity: float = 1.0


@dataclass(frozen=True)
class NutrientTotals:
    """Nutrients for a gram mass of food."""

    grams: float
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float | None
    sodium: float | None


@dataclass(frozen=True)
class PortionResult:
    """Resolved portion with its scaled nutrients."""

    grams: float
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float | None
    sodium: float | None
    resolution: PortionResolution

    @property
    def used_fallback(self) -> bool:
        """True when the mass came from the food's default portion size."""
        return self.resolution is PortionResolution.PORTION_FALLBACK

    @property
    def not_found(self) -> bool:
        """True when the referenced measure does not exist."""
        return self.resolution is PortionResolution.NOT_FOUND


@dataclass(frozen=True)
class NutritionCheck:
    """Comparison of a food's stored calories with its macro calories."""

    is_valid: bool
    stored_calories: float
    calculated_calories: float
    difference: float
