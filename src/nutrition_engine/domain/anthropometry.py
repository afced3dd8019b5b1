"""Domain models for anthropometric measurements and body composition."""

from dataclasses import dataclass
from enum import Enum


class Sex(str, Enum):
    """Biological sex used by sex-specific equations."""

    MALE = "male"
    FEMALE = "female"


class DensityFormula(str, Enum):
    """Skinfold equations for body density."""

    POLLOCK_3 = "pollock3"
    POLLOCK_7 = "pollock7"
    WELTMAN = "weltman"


class FrameSize(str, Enum):
    """Bone frame classification from the height/wrist ratio."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class BmiCategory(str, Enum):
    """Adult BMI bands."""

    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


class SomatotypeClass(str, Enum):
    """Dominant somatotype classification."""

    ENDOMORPH = "endomorph"
    ENDO_MESOMORPH = "endo-mesomorph"
    MESOMORPH = "mesomorph"
    MESO_ENDOMORPH = "meso-endomorph"
    MESO_ECTOMORPH = "meso-ectomorph"
    ECTOMORPH = "ectomorph"
    ECTO_MESOMORPH = "ecto-mesomorph"


@dataclass(frozen=True)
class MeasurementRecord:
    """Single anthropometric assessment.

    Skinfolds are in millimetres; circumferences, bone widths and height in
    centimetres; weight in kilograms. Missing measurements are ``None``.
    """

    weight: float | None = None
    height: float | None = None
    age: float | None = None
    sex: Sex | None = None
    triceps: float | None = None
    subscapular: float | None = None
    suprailiac: float | None = None
    chest: float | None = None
    axillary: float | None = None
    abdominal: float | None = None
    thigh: float | None = None
    biceps: float | None = None
    arm_circumference: float | None = None
    calf_circumference: float | None = None
    wrist_circumference: float | None = None
    humerus_width: float | None = None
    femur_width: float | None = None


@dataclass(frozen=True)
class FrameSizeResult:
    """Frame size classification with the ratio it came from."""

    category: FrameSize
    ratio: float


@dataclass(frozen=True)
class SomatotypeResult:
    """Heath-Carter components and somatochart coordinates."""

    endo: float
    meso: float
    ecto: float
    x: float
    y: float


@dataclass(frozen=True)
class BodyCompositionReport:
    """Everything derivable from one measurement record."""

    density: float | None
    body_fat_percent: float | None
    fat_mass_kg: float | None
    lean_mass_kg: float | None
    bmi: float | None
    bmi_category: BmiCategory | None
    frame_size: FrameSizeResult | None
    somatotype: SomatotypeResult | None
