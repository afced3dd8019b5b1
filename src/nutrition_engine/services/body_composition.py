"""Body composition estimates from skinfolds, girths and bone widths.

Density equations follow Jackson & Pollock (3 and 7 skinfolds) and Weltman
(4 skinfolds); fat percentage uses the Siri (1961) equation; physique uses
the Heath-Carter somatotype components. Every estimator returns ``None``
when the measurements it needs are missing.
"""

import logging
import math

from nutrition_engine.domain.anthropometry import (
    BmiCategory,
    BodyCompositionReport,
    DensityFormula,
    FrameSize,
    FrameSizeResult,
    MeasurementRecord,
    Sex,
    SomatotypeClass,
    SomatotypeResult,
)
from nutrition_engine.domain.errors import InvalidInputError

ECTOMORPHY_FLOOR = 0.1
HWR_UPPER = 0.462
HWR_LOWER = 0.231

_FRAME_THRESHOLDS: dict[Sex, tuple[float, float]] = {
    Sex.MALE: (10.9, 9.9),
    Sex.FEMALE: (11.0, 10.1),
}

_logger = logging.getLogger(__name__)


def compute_body_density(
    formula: DensityFormula, measurements: MeasurementRecord
) -> float | None:
    """Return body density (g/cm³) using the chosen skinfold equation."""
    formula = DensityFormula(formula)
    if measurements.sex is None:
        return None
    is_male = measurements.sex == Sex.MALE
    if formula is DensityFormula.POLLOCK_3:
        return _pollock_3(measurements, is_male)
    if formula is DensityFormula.POLLOCK_7:
        return _pollock_7(measurements, is_male)
    return _weltman(measurements, is_male)


def compute_body_fat_percent(density: float | None) -> float | None:
    """Convert body density to fat percentage with the Siri equation."""
    if density is None or density <= 0:
        return None
    return ((4.95 / density) - 4.5) * 100


def compute_body_masses(
    weight: float | None, body_fat_percent: float | None
) -> tuple[float, float] | None:
    """Split body weight into ``(fat_mass_kg, lean_mass_kg)``."""
    weight = _measured("weight", weight)
    if weight is None or body_fat_percent is None:
        return None
    fat_mass = weight * min(max(body_fat_percent, 0.0), 100.0) / 100
    return fat_mass, weight - fat_mass


def compute_frame_size(
    height: float | None, wrist: float | None, sex: Sex | None
) -> FrameSizeResult | None:
    """Classify bone frame from the height/wrist circumference ratio."""
    height = _measured("height", height)
    wrist = _measured("wrist_circumference", wrist)
    if height is None or wrist is None or sex is None:
        return None
    ratio = height / wrist
    small_above, medium_above = _FRAME_THRESHOLDS[sex]
    if ratio > small_above:
        category = FrameSize.SMALL
    elif ratio > medium_above:
        category = FrameSize.MEDIUM
    else:
        category = FrameSize.LARGE
    return FrameSizeResult(category=category, ratio=ratio)


def compute_bmi(weight: float | None, height: float | None) -> float | None:
    """Return body mass index from kg and cm."""
    weight = _measured("weight", weight)
    height = _measured("height", height)
    if weight is None or height is None:
        return None
    return weight / (height / 100) ** 2


def classify_bmi(bmi: float | None) -> BmiCategory | None:
    """Return the adult BMI band."""
    if bmi is None:
        return None
    if bmi < 18.5:
        return BmiCategory.UNDERWEIGHT
    if bmi < 25:
        return BmiCategory.NORMAL
    if bmi < 30:
        return BmiCategory.OVERWEIGHT
    return BmiCategory.OBESE


def compute_somatotype(measurements: MeasurementRecord) -> SomatotypeResult | None:
    """Return the Heath-Carter somatotype when all three components exist."""
    height = _measured("height", measurements.height)
    weight = _measured("weight", measurements.weight)
    if height is None or weight is None:
        return None

    endomorphy = _endomorphy(measurements)
    mesomorphy = _mesomorphy(measurements, height)
    ectomorphy = _ectomorphy(height, weight)
    if endomorphy is None or mesomorphy is None:
        return None

    x = ectomorphy - endomorphy
    y = 2 * mesomorphy - (endomorphy + ectomorphy)
    return SomatotypeResult(
        endo=round(endomorphy, 2),
        meso=round(mesomorphy, 2),
        ecto=round(ectomorphy, 2),
        x=round(x, 2),
        y=round(y, 2),
    )


def classify_somatotype(result: SomatotypeResult) -> SomatotypeClass:
    """Return the dominant component, qualified by the stronger secondary."""
    endo, meso, ecto = result.endo, result.meso, result.ecto
    dominant = max(endo, meso, ecto)
    if dominant == endo:
        if meso > ecto:
            return SomatotypeClass.ENDO_MESOMORPH
        return SomatotypeClass.ENDOMORPH
    if dominant == meso:
        if endo > ecto:
            return SomatotypeClass.MESO_ENDOMORPH
        if ecto > endo:
            return SomatotypeClass.MESO_ECTOMORPH
        return SomatotypeClass.MESOMORPH
    if meso > endo:
        return SomatotypeClass.ECTO_MESOMORPH
    return SomatotypeClass.ECTOMORPH


def assess_body_composition(
    measurements: MeasurementRecord,
    formula: DensityFormula = DensityFormula.POLLOCK_3,
) -> BodyCompositionReport:
    """Compute every estimate the measurements allow."""
    density = compute_body_density(formula, measurements)
    body_fat = compute_body_fat_percent(density)
    masses = compute_body_masses(measurements.weight, body_fat)
    bmi = compute_bmi(measurements.weight, measurements.height)
    report = BodyCompositionReport(
        density=density,
        body_fat_percent=body_fat,
        fat_mass_kg=masses[0] if masses else None,
        lean_mass_kg=masses[1] if masses else None,
        bmi=bmi,
        bmi_category=classify_bmi(bmi),
        frame_size=compute_frame_size(
            measurements.height, measurements.wrist_circumference, measurements.sex
        ),
        somatotype=compute_somatotype(measurements),
    )
    _logger.debug("Body composition (%s): %s", formula.value, report)
    return report


def _pollock_3(measurements: MeasurementRecord, is_male: bool) -> float | None:
    folds = _skinfold_sum(measurements, ("triceps", "subscapular", "suprailiac"))
    age = _measured("age", measurements.age)
    if folds is None or age is None:
        return None
    if is_male:
        return 1.10938 - 0.0008267 * folds + 0.0000016 * folds**2 - 0.0002574 * age
    return 1.0994921 - 0.0009929 * folds + 0.0000023 * folds**2 - 0.0001392 * age


def _pollock_7(measurements: MeasurementRecord, is_male: bool) -> float | None:
    folds = _skinfold_sum(
        measurements,
        (
            "chest",
            "axillary",
            "triceps",
            "subscapular",
            "abdominal",
            "suprailiac",
            "thigh",
        ),
    )
    age = _measured("age", measurements.age)
    if folds is None or age is None:
        return None
    if is_male:
        return 1.112 - 0.00043499 * folds + 0.00000055 * folds**2 - 0.00028826 * age
    return 1.097 - 0.00046971 * folds + 0.00000056 * folds**2 - 0.00012828 * age


def _weltman(measurements: MeasurementRecord, is_male: bool) -> float | None:
    folds = _skinfold_sum(
        measurements, ("triceps", "biceps", "subscapular", "suprailiac")
    )
    if folds is None:
        return None
    log_sum = math.log10(folds)
    if is_male:
        return 1.1714 - 0.0671 * log_sum
    return 1.1665 - 0.0706 * log_sum


def _endomorphy(measurements: MeasurementRecord) -> float | None:
    folds = _skinfold_sum(measurements, ("triceps", "subscapular", "suprailiac"))
    if folds is None:
        return None
    value = -0.7182 + 0.1451 * folds - 0.00068 * folds**2 + 0.0000014 * folds**3
    return max(value, 0.0)


def _mesomorphy(measurements: MeasurementRecord, height: float) -> float | None:
    humerus = _measured("humerus_width", measurements.humerus_width)
    femur = _measured("femur_width", measurements.femur_width)
    arm = _measured("arm_circumference", measurements.arm_circumference)
    calf = _measured("calf_circumference", measurements.calf_circumference)
    if humerus is None or femur is None or arm is None or calf is None:
        return None
    # Calf girth is corrected with the subscapular fold, not a calf fold.
    triceps = _measured("triceps", measurements.triceps) or 0.0
    subscapular = _measured("subscapular", measurements.subscapular) or 0.0
    corrected_arm = arm - triceps / 10
    corrected_calf = calf - subscapular / 10
    value = (
        0.858 * humerus
        + 0.601 * femur
        + 0.188 * corrected_arm
        + 0.161 * corrected_calf
        - 0.131 * (height / 100)
        + 4.5
    )
    return max(value, 0.0)


def _ectomorphy(height: float, weight: float) -> float:
    ratio = (height / 100) / weight ** (1 / 3)
    if ratio >= HWR_UPPER:
        value = 0.732 * ratio - 28.58
    elif ratio >= HWR_LOWER:
        value = 0.463 * ratio - 5.5
    else:
        value = ECTOMORPHY_FLOOR
    return max(value, ECTOMORPHY_FLOOR)


def _skinfold_sum(
    measurements: MeasurementRecord, fields: tuple[str, ...]
) -> float | None:
    total = 0.0
    for name in fields:
        value = _measured(name, getattr(measurements, name))
        if value is None:
            return None
        total += value
    return total


def _measured(field: str, value: float | None) -> float | None:
    """Return a positive measurement, ``None`` when not taken."""
    if value is None or value == 0:
        return None
    if value < 0:
        raise InvalidInputError(field, "must not be negative")
    return float(value)
