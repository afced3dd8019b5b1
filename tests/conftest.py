"""Shared test fixtures."""

import pytest

from nutrition_engine.adapters.in_memory_measures import InMemoryMeasureCatalog
from nutrition_engine.config import Settings
from nutrition_engine.domain.anthropometry import MeasurementRecord, Sex
from nutrition_engine.domain.energy import EnergyInputs
from nutrition_engine.domain.foods import (
    Food,
    FoodMeasureConversion,
    HouseholdMeasure,
    MeasureCategory,
)
from nutrition_engine.services.energy import EnergyService
from nutrition_engine.services.portions import PortionService

TABLESPOON_ID = 10
UNIT_ID = 20
CUP_ID = 30


def make_food(**overrides: object) -> Food:
    """Build a rice-like food with overridable fields."""
    values: dict[str, object] = {
        "id": 1,
        "name": "White rice, cooked",
        "protein": 2.5,
        "carbs": 28.0,
        "fat": 0.3,
        "fiber": 1.6,
        "sodium": 1.0,
        "calories": 999.0,
        "portion_size": None,
    }
    values.update(overrides)
    return Food(**values)


def full_measurements(**overrides: object) -> MeasurementRecord:
    """Build a measurement record with every somatotype input present."""
    values: dict[str, object] = {
        "weight": 70.0,
        "height": 175.0,
        "age": 30,
        "sex": Sex.MALE,
        "triceps": 10.0,
        "subscapular": 12.0,
        "suprailiac": 14.0,
        "humerus_width": 7.0,
        "femur_width": 9.5,
        "arm_circumference": 32.0,
        "calf_circumference": 37.0,
        "wrist_circumference": 17.0,
    }
    values.update(overrides)
    return MeasurementRecord(**values)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def catalog() -> InMemoryMeasureCatalog:
    return InMemoryMeasureCatalog.from_records(
        measures=[
            HouseholdMeasure(
                id=TABLESPOON_ID,
                name="tablespoon",
                category=MeasureCategory.VOLUME,
                grams_equivalent=25.0,
                ml_equivalent=15.0,
                order_index=2,
            ),
            HouseholdMeasure(
                id=UNIT_ID,
                name="unit",
                category=MeasureCategory.UNIT,
                order_index=1,
            ),
            HouseholdMeasure(
                id=CUP_ID,
                name="cup",
                category=MeasureCategory.VOLUME,
                grams_equivalent=160.0,
                order_index=3,
                is_active=False,
            ),
        ],
        conversions=[
            FoodMeasureConversion(
                food_id=1, measure_id=TABLESPOON_ID, quantity=1, grams=15
            ),
        ],
    )


@pytest.fixture
def portion_service(catalog: InMemoryMeasureCatalog) -> PortionService:
    return PortionService(catalog)


@pytest.fixture
def energy_service() -> EnergyService:
    return EnergyService()


@pytest.fixture
def male_inputs() -> EnergyInputs:
    return EnergyInputs(
        weight=80.0, height=180.0, age=30, sex=Sex.MALE, activity_factor=1.55
    )


@pytest.fixture
def female_inputs() -> EnergyInputs:
    return EnergyInputs(
        weight=60.0, height=165.0, age=25, sex=Sex.FEMALE, activity_factor=1.2
    )
