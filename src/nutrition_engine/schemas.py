"""Pydantic models for raw caller records and persisted energy results."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nutrition_engine.domain.anthropometry import MeasurementRecord, Sex
from nutrition_engine.domain.energy import ActivityLevel, EnergyInputs, ExerciseSession
from nutrition_engine.domain.foods import (
    Food,
    FoodMeasureConversion,
    HouseholdMeasure,
    MeasureCategory,
)

_SEX_ALIASES = {
    "m": Sex.MALE,
    "male": Sex.MALE,
    "masculino": Sex.MALE,
    "f": Sex.FEMALE,
    "female": Sex.FEMALE,
    "feminino": Sex.FEMALE,
}


def _parse_sex(value: object) -> Sex | None:
    if value is None or isinstance(value, Sex):
        return value
    sex = _SEX_ALIASES.get(str(value).strip().lower())
    if sex is None:
        raise ValueError(f"unknown sex {value!r}")
    return sex


class FoodPayload(BaseModel):
    """Food row with per-100g nutrients."""

    id: int | str
    name: str = ""
    protein: float = Field(default=0.0, ge=0)
    carbs: float = Field(default=0.0, ge=0)
    fat: float = Field(default=0.0, ge=0)
    fiber: float | None = Field(default=None, ge=0)
    sodium: float | None = Field(default=None, ge=0)
    calories: float | None = None
    portion_size: float | None = Field(default=None, gt=0)

    def to_domain(self) -> Food:
        """Return the domain food."""
        return Food(**self.model_dump())


class HouseholdMeasurePayload(BaseModel):
    """Generic household measure row."""

    id: int | str
    name: str = ""
    category: MeasureCategory = MeasureCategory.OTHER
    grams_equivalent: float | None = Field(default=None, ge=0)
    ml_equivalent: float | None = Field(default=None, ge=0)
    order_index: int = 0
    is_active: bool = True

    def to_domain(self) -> HouseholdMeasure:
        """Return the domain measure."""
        return HouseholdMeasure(**self.model_dump())


class FoodMeasureConversionPayload(BaseModel):
    """Food-specific measure conversion row."""

    food_id: int | str
    measure_id: int | str
    grams: float = Field(gt=0)
    quantity: float = Field(default=1.0, gt=0)

    def to_domain(self) -> FoodMeasureConversion:
        """Return the domain conversion."""
        return FoodMeasureConversion(**self.model_dump())


class MeasurementPayload(BaseModel):
    """Anthropometric assessment as submitted by a form."""

    model_config = ConfigDict(populate_by_name=True)

    weight: float | None = Field(default=None, ge=0)
    height: float | None = Field(default=None, ge=0)
    age: float | None = Field(default=None, ge=0)
    sex: Sex | None = Field(default=None, alias="gender")
    triceps: float | None = Field(default=None, ge=0)
    subscapular: float | None = Field(default=None, ge=0)
    suprailiac: float | None = Field(default=None, ge=0)
    chest: float | None = Field(default=None, ge=0)
    axillary: float | None = Field(default=None, ge=0)
    abdominal: float | None = Field(default=None, ge=0)
    thigh: float | None = Field(default=None, ge=0)
    biceps: float | None = Field(default=None, ge=0)
    arm_circumference: float | None = Field(default=None, ge=0)
    calf_circumference: float | None = Field(default=None, ge=0)
    wrist_circumference: float | None = Field(default=None, ge=0)
    humerus_width: float | None = Field(default=None, ge=0)
    femur_width: float | None = Field(default=None, ge=0)

    @field_validator("sex", mode="before")
    @classmethod
    def _normalize_sex(cls, value: object) -> Sex | None:
        return _parse_sex(value)

    def to_domain(self) -> MeasurementRecord:
        """Return the domain measurement record."""
        return MeasurementRecord(**self.model_dump())


class ActivityEntry(BaseModel):
    """Recurring exercise selected on the energy screen."""

    model_config = ConfigDict(populate_by_name=True)

    exercise_id: str = Field(alias="exerciseId")
    minutes: float = Field(ge=0)
    days_per_week: float = Field(alias="daysPerWeek", ge=0, le=7)
    met: float | None = Field(default=None, gt=0)

    def to_domain(self) -> ExerciseSession:
        """Return the domain exercise session."""
        return ExerciseSession(
            exercise_id=self.exercise_id,
            minutes=self.minutes,
            days_per_week=self.days_per_week,
            met=self.met,
        )


class EnergyRequest(BaseModel):
    """Patient data submitted for an energy calculation."""

    model_config = ConfigDict(populate_by_name=True)

    protocol: str = "harris-benedict"
    weight: float = Field(gt=0)
    height: float = Field(gt=0)
    age: float = Field(gt=0)
    sex: Sex = Field(alias="gender")
    activity_level: float = ActivityLevel.SEDENTARY.factor
    lean_mass: float | None = Field(default=None, alias="leanMass", ge=0)
    activities: list[ActivityEntry] = Field(default_factory=list)
    target_weight: float | None = Field(default=None, gt=0)

    @field_validator("sex", mode="before")
    @classmethod
    def _normalize_sex(cls, value: object) -> Sex | None:
        return _parse_sex(value)

    def to_inputs(self) -> EnergyInputs:
        """Return normalized protocol inputs."""
        return EnergyInputs(
            weight=self.weight,
            height=self.height,
            age=self.age,
            sex=self.sex,
            activity_factor=self.activity_level,
            lean_mass=self.lean_mass,
        )

    def to_sessions(self) -> list[ExerciseSession]:
        """Return the selected exercise sessions."""
        return [entry.to_domain() for entry in self.activities]


class EnergyExpenditureRecord(BaseModel):
    """Energy result in the shape the caller persists per patient."""

    patient_id: str
    protocol: str
    tmb: float | None
    get: float | None
    get_with_activities: float | None = None
    activity_level: float
    activities: list[ActivityEntry] | None = None
    target_weight: float | None = None
    venta_adjusted: float | None = None
