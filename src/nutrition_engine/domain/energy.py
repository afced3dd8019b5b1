"""Domain models for energy expenditure protocols."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from nutrition_engine.domain.anthropometry import Sex


class ProtocolCategory(str, Enum):
    """How a protocol reaches its daily energy figure."""

    BASAL = "basal"
    ENERGY_REQUIREMENT = "energy_requirement"


class Goal(str, Enum):
    """Weight goal for the simple macro calculator."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


@dataclass(frozen=True)
class ActivityFactor:
    """Physical activity level multiplier."""

    value: float
    label: str
    description: str


class ActivityLevel(Enum):
    """Discrete physical activity levels."""

    SEDENTARY = ActivityFactor(1.2, "Sedentary", "Little or no exercise")
    LIGHT = ActivityFactor(1.375, "Lightly active", "Light exercise 1-3 days/week")
    MODERATE = ActivityFactor(
        1.55, "Moderately active", "Moderate exercise 3-5 days/week"
    )
    VERY_ACTIVE = ActivityFactor(1.725, "Very active", "Hard exercise 6-7 days/week")
    EXTREMELY_ACTIVE = ActivityFactor(
        1.9, "Extremely active", "Physical job or training twice a day"
    )

    @property
    def factor(self) -> float:
        """Return the numeric multiplier."""
        return self.value.value


@dataclass(frozen=True)
class EnergyInputs:
    """Normalized inputs shared by every protocol.

    Weight in kg, height in cm, age in years, lean mass in kg.
    """

    weight: float
    height: float
    age: float
    sex: Sex
    activity_factor: float = ActivityLevel.SEDENTARY.factor
    lean_mass: float | None = None

    @property
    def is_male(self) -> bool:
        """Return True for male inputs."""
        return self.sex == Sex.MALE


@dataclass(frozen=True)
class EnergyProtocol:
    """Registry entry for a named energy protocol."""

    id: str
    label: str
    category: ProtocolCategory
    required_inputs: frozenset[str]
    compute: Callable[[EnergyInputs], float | None]
    description: str = ""
    athlete: bool = False
    recommended: bool = False
    aliases: tuple[str, ...] = ()


@dataclass(frozen=True)
class Exercise:
    """Catalog entry for an exercise with its MET value."""

    id: str
    name: str
    met: float
    category: str


@dataclass(frozen=True)
class ExerciseSession:
    """Recurring exercise selected for a patient."""

    exercise_id: str
    minutes: float
    days_per_week: float
    met: float | None = None


@dataclass(frozen=True)
class EnergyProtocolResult:
    """Energy expenditure computed by one protocol."""

    protocol_id: str
    label: str
    category: ProtocolCategory
    bmr: float | None
    get: float | None
    activity_factor: float
    get_with_activities: float | None = None
    target_weight_adjusted_get: float | None = None


@dataclass(frozen=True)
class ProtocolDeviation:
    """One row of a protocol comparison."""

    protocol_id: str
    label: str
    bmr: float
    get: int
    diff_percent: int
    recommended: bool
    athlete: bool


@dataclass(frozen=True)
class ProtocolComparison:
    """Mean BMR across protocols and how far each one deviates."""

    mean_bmr: float | None
    activity_factor: float
    entries: list[ProtocolDeviation] = field(default_factory=list)
    excluded: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class MacroTargets:
    """Daily calorie and macronutrient targets."""

    calories: int
    protein_g: int
    fat_g: int
    carbs_g: int


@dataclass(frozen=True)
class WeightProjection:
    """Expected weekly and monthly weight change for a daily energy balance."""

    is_loss: bool
    weekly_kg: float
    weekly_min_kg: float
    weekly_max_kg: float
    monthly_kg: float
