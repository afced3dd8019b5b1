"""In-memory measure catalog built from caller-supplied tables."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from nutrition_engine.domain.foods import FoodMeasureConversion, HouseholdMeasure
from nutrition_engine.services.portions import MeasureCatalog


@dataclass
class InMemoryMeasureCatalog(MeasureCatalog):
    """Measure catalog backed by plain dictionaries."""

    measures: dict[str, HouseholdMeasure] = field(default_factory=dict)
    conversions: dict[tuple[str, str], FoodMeasureConversion] = field(
        default_factory=dict
    )

    @classmethod
    def from_records(
        cls,
        measures: Iterable[HouseholdMeasure] = (),
        conversions: Iterable[FoodMeasureConversion] = (),
    ) -> "InMemoryMeasureCatalog":
        """Build a catalog from measure and conversion rows."""
        catalog = cls()
        for measure in measures:
            catalog.add_measure(measure)
        for conversion in conversions:
            catalog.add_conversion(conversion)
        return catalog

    def add_measure(self, measure: HouseholdMeasure) -> None:
        """Register a generic household measure."""
        self.measures[str(measure.id)] = measure

    def add_conversion(self, conversion: FoodMeasureConversion) -> None:
        """Register a food-specific conversion, replacing any previous one."""
        key = (str(conversion.food_id), str(conversion.measure_id))
        self.conversions[key] = conversion

    def get_measure(self, measure_id: int | str) -> HouseholdMeasure | None:
        """Return a generic measure by id."""
        return self.measures.get(str(measure_id))

    def get_conversion(
        self, food_id: int | str, measure_id: int | str
    ) -> FoodMeasureConversion | None:
        """Return the food-specific conversion for a measure."""
        return self.conversions.get((str(food_id), str(measure_id)))

    def list_conversions(self, food_id: int | str) -> list[FoodMeasureConversion]:
        """Return every conversion registered for a food."""
        return [
            conversion
            for (conversion_food_id, _), conversion in self.conversions.items()
            if conversion_food_id == str(food_id)
        ]

    def list_selectable_measures(self, food_id: int | str) -> list[HouseholdMeasure]:
        """Return measures offered for a food, specific ones first."""
        specific_ids = [
            str(conversion.measure_id) for conversion in self.list_conversions(food_id)
        ]
        specific = [
            self.measures[measure_id]
            for measure_id in specific_ids
            if measure_id in self.measures
        ]
        generic = sorted(
            (
                measure
                for key, measure in self.measures.items()
                if measure.is_active and key not in specific_ids
            ),
            key=lambda measure: measure.order_index,
        )
        return specific + generic
