"""Energy expenditure protocols (BMR, GET and energy requirements).

Every protocol is a registry entry keyed by id. Basal protocols return a
BMR that is multiplied by the activity factor; energy-requirement protocols
(EER/IOM) already include activity and have no basal figure.
"""

import logging
import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace

from nutrition_engine.domain.energy import (
    ActivityLevel,
    EnergyInputs,
    EnergyProtocol,
    EnergyProtocolResult,
    Exercise,
    ExerciseSession,
    Goal,
    ProtocolCategory,
)
from nutrition_engine.domain.errors import InvalidInputError, UnknownProtocolError

ATHLETE_BODY_FAT_THRESHOLD = 15.0
OVERWEIGHT_BMI = 25.0
DAYS_PER_WEEK = 7

_BASIC_INPUTS = frozenset({"weight", "height", "age", "sex"})
_LEAN_MASS_INPUTS = frozenset({"lean_mass"})
_EER_INPUTS = frozenset({"weight", "height", "age", "sex", "activity_factor"})

_logger = logging.getLogger(__name__)


def _harris_benedict(inputs: EnergyInputs) -> float:
    w, h, a = inputs.weight, inputs.height, inputs.age
    if inputs.is_male:
        return 88.362 + 13.397 * w + 4.799 * h - 5.677 * a
    return 447.593 + 9.247 * w + 3.098 * h - 4.330 * a


def _mifflin_st_jeor(inputs: EnergyInputs) -> float:
    s = 5 if inputs.is_male else -161
    return 10 * inputs.weight + 6.25 * inputs.height - 5 * inputs.age + s


def _fao_who_1985(inputs: EnergyInputs) -> float:
    w, a = inputs.weight, inputs.age
    if inputs.is_male:
        if a < 30:
            return 15.3 * w + 679
        if a < 60:
            return 11.6 * w + 879
        return 13.5 * w + 487
    if a < 30:
        return 14.7 * w + 496
    if a < 60:
        return 8.7 * w + 829
    return 10.5 * w + 596


def _fao_who_2001(inputs: EnergyInputs) -> float:
    w, h, a = inputs.weight, inputs.height / 100, inputs.age
    if inputs.is_male:
        if a < 30:
            return 15.4 * w - 27 * h + 717
        if a < 60:
            return 11.3 * w + 16 * h + 901
        return 8.8 * w + 1128 * h - 1071
    if a < 30:
        return 13.3 * w + 334 * h + 35
    if a < 60:
        return 8.7 * w - 25 * h + 865
    return 9.2 * w + 637 * h - 302


# (upper age bound, weight coefficient, constant) per sex
_SCHOFIELD_BANDS: dict[bool, tuple[tuple[float, float, float], ...]] = {
    True: (
        (3, 59.512, -30.4),
        (10, 22.706, 504.3),
        (18, 17.686, 658.2),
        (30, 15.057, 692.2),
        (60, 11.472, 873.1),
        (math.inf, 11.711, 587.7),
    ),
    False: (
        (3, 58.317, -31.1),
        (10, 20.315, 485.9),
        (18, 13.384, 692.6),
        (30, 14.818, 486.6),
        (60, 8.126, 845.6),
        (math.inf, 9.082, 658.5),
    ),
}


def _schofield(inputs: EnergyInputs) -> float:
    bands = _SCHOFIELD_BANDS[inputs.is_male]
    coefficient, constant = next(
        (slope, intercept) for upper, slope, intercept in bands if inputs.age < upper
    )
    return coefficient * inputs.weight + constant


def _owen(inputs: EnergyInputs) -> float | None:
    if inputs.is_male:
        return None
    return 795 + 7.18 * inputs.weight


def _lean_mass_equation(
    slope: float, constant: float
) -> Callable[[EnergyInputs], float | None]:
    def compute(inputs: EnergyInputs) -> float | None:
        if not inputs.lean_mass or inputs.lean_mass <= 0:
            return None
        return constant + slope * inputs.lean_mass

    return compute


def _eer_iom_2005(inputs: EnergyInputs) -> float:
    w, h, a = inputs.weight, inputs.height / 100, inputs.age
    pa = inputs.activity_factor
    if inputs.is_male:
        return 662 - 9.53 * a + pa * (15.91 * w + 539.6 * h)
    return 354 - 6.91 * a + pa * (9.36 * w + 726 * h)


def _eer_iom_2005_overweight(inputs: EnergyInputs) -> float:
    return _eer_iom_2005(inputs) * 0.9


def _eer_iom_2023(inputs: EnergyInputs) -> float:
    w, h, a = inputs.weight, inputs.height / 100, inputs.age
    pa = inputs.activity_factor
    if inputs.is_male:
        return 693 - 9.8 * a + pa * (16.2 * w + 545 * h)
    return 378 - 7.1 * a + pa * (9.5 * w + 732 * h)


PROTOCOLS: dict[str, EnergyProtocol] = {
    protocol.id: protocol
    for protocol in (
        EnergyProtocol(
            id="harris-benedict",
            label="Harris-Benedict (1984)",
            category=ProtocolCategory.BASAL,
            required_inputs=_BASIC_INPUTS,
            compute=_harris_benedict,
            description="Classic equation for the general population.",
            aliases=("harris",),
        ),
        EnergyProtocol(
            id="mifflin-st-jeor",
            label="Mifflin-St Jeor (1990)",
            category=ProtocolCategory.BASAL,
            required_inputs=_BASIC_INPUTS,
            compute=_mifflin_st_jeor,
            description="Clinical reference, most accurate with overweight.",
            recommended=True,
            aliases=("mifflin",),
        ),
        EnergyProtocol(
            id="fao-who-1985",
            label="FAO/WHO (1985)",
            category=ProtocolCategory.BASAL,
            required_inputs=frozenset({"weight", "age", "sex"}),
            compute=_fao_who_1985,
            description="World Health Organization reference by age band.",
            aliases=("fao", "fao-who", "fao-oms-1985"),
        ),
        EnergyProtocol(
            id="fao-who-2001",
            label="FAO/WHO/UNU (2001)",
            category=ProtocolCategory.BASAL,
            required_inputs=_BASIC_INPUTS,
            compute=_fao_who_2001,
            description="Updated international reference.",
            aliases=("fao2001", "fao-oms-2001"),
        ),
        EnergyProtocol(
            id="schofield",
            label="Schofield (1985)",
            category=ProtocolCategory.BASAL,
            required_inputs=frozenset({"weight", "age", "sex"}),
            compute=_schofield,
            description="Population-based equations, widely used in Europe.",
        ),
        EnergyProtocol(
            id="owen",
            label="Owen (1986)",
            category=ProtocolCategory.BASAL,
            required_inputs=frozenset({"weight", "sex"}),
            compute=_owen,
            description="Women only.",
        ),
        EnergyProtocol(
            id="cunningham",
            label="Cunningham (1980)",
            category=ProtocolCategory.BASAL,
            required_inputs=_LEAN_MASS_INPUTS,
            compute=_lean_mass_equation(22, 500),
            description="Lean-mass based, suited to high performance.",
            athlete=True,
        ),
        EnergyProtocol(
            id="tinsley",
            label="Tinsley (Bodybuilding)",
            category=ProtocolCategory.BASAL,
            required_inputs=_LEAN_MASS_INPUTS,
            compute=_lean_mass_equation(25.9, 284),
            description="Strength and physique athletes.",
            athlete=True,
        ),
        EnergyProtocol(
            id="katch-mcardle",
            label="Katch-McArdle",
            category=ProtocolCategory.BASAL,
            required_inputs=_LEAN_MASS_INPUTS,
            compute=_lean_mass_equation(21.6, 370),
            description="Fat-free mass based.",
            athlete=True,
            aliases=("katch",),
        ),
        EnergyProtocol(
            id="de-lorenzo",
            label="De Lorenzo (1999)",
            category=ProtocolCategory.BASAL,
            required_inputs=_LEAN_MASS_INPUTS,
            compute=_lean_mass_equation(22, 500),
            description="Fat-free mass based, for athletes.",
            athlete=True,
            aliases=("delorenzo",),
        ),
        EnergyProtocol(
            id="eer-iom-2005",
            label="EER/IOM (2005)",
            category=ProtocolCategory.ENERGY_REQUIREMENT,
            required_inputs=_EER_INPUTS,
            compute=_eer_iom_2005,
            description="Estimated energy requirement, activity included.",
        ),
        EnergyProtocol(
            id="eer-iom-2005-overweight",
            label="EER/IOM (2005) Overweight",
            category=ProtocolCategory.ENERGY_REQUIREMENT,
            required_inputs=_EER_INPUTS,
            compute=_eer_iom_2005_overweight,
            description="EER/IOM 2005 reduced by 10% for overweight.",
            aliases=("eer-iom-2005-sobrepeso",),
        ),
        EnergyProtocol(
            id="eer-iom-2023",
            label="EER/IOM (2023)",
            category=ProtocolCategory.ENERGY_REQUIREMENT,
            required_inputs=_EER_INPUTS,
            compute=_eer_iom_2023,
            description="Estimated energy requirement with revised coefficients.",
        ),
    )
}

_ALIASES: dict[str, str] = {
    alias: protocol.id for protocol in PROTOCOLS.values() for alias in protocol.aliases
}

EXERCISES: dict[str, Exercise] = {
    exercise.id: exercise
    for exercise in (
        Exercise("walking-slow", "Slow walking", 2.0, "cardio"),
        Exercise("walking-moderate", "Moderate walking", 3.5, "cardio"),
        Exercise("walking-brisk", "Brisk walking", 5.0, "cardio"),
        Exercise("cycling-light", "Light cycling", 4.0, "cardio"),
        Exercise("cycling-moderate", "Moderate cycling", 6.0, "cardio"),
        Exercise("cycling-intense", "Intense cycling", 10.0, "cardio"),
        Exercise("swimming-light", "Light swimming", 5.0, "cardio"),
        Exercise("swimming-moderate", "Moderate swimming", 7.0, "cardio"),
        Exercise("swimming-intense", "Intense swimming", 10.0, "cardio"),
        Exercise("running-light", "Light running (8 km/h)", 8.0, "cardio"),
        Exercise("running-moderate", "Moderate running (10 km/h)", 10.0, "cardio"),
        Exercise("running-intense", "Intense running (12+ km/h)", 12.0, "cardio"),
        Exercise("elliptical", "Elliptical", 5.0, "cardio"),
        Exercise("stair-climber", "Stair climber", 8.0, "cardio"),
        Exercise("rowing", "Rowing machine", 7.0, "cardio"),
        Exercise("step-class", "Step class", 8.0, "cardio"),
        Exercise("zumba", "Zumba", 7.0, "cardio"),
        Exercise("spinning", "Spinning", 9.0, "cardio"),
        Exercise("weight-training-light", "Light weight training", 3.0, "strength"),
        Exercise(
            "weight-training-moderate", "Moderate weight training", 5.0, "strength"
        ),
        Exercise("weight-training-intense", "Intense weight training", 6.0, "strength"),
        Exercise("crossfit", "CrossFit", 8.0, "strength"),
        Exercise("functional-training", "Functional training", 6.0, "strength"),
        Exercise("pilates", "Pilates", 3.0, "strength"),
        Exercise("yoga", "Yoga", 2.5, "strength"),
        Exercise("soccer", "Soccer", 7.0, "sport"),
        Exercise("basketball", "Basketball", 8.0, "sport"),
        Exercise("tennis", "Tennis", 7.0, "sport"),
        Exercise("volleyball", "Volleyball", 3.0, "sport"),
        Exercise("dance", "Dance", 4.5, "sport"),
        Exercise("martial-arts", "Martial arts", 10.0, "sport"),
    )
}


@dataclass
class EnergyService:
    """Computes energy expenditure for named protocols."""

    goal_adjustment_kcal: float = 500.0
    debug: bool = False

    def compute_protocol(
        self,
        protocol_id: str,
        inputs: EnergyInputs,
        activities: Iterable[ExerciseSession] = (),
        target_weight: float | None = None,
    ) -> EnergyProtocolResult:
        """Compute BMR, GET and the optional activity/VENTA figures."""
        protocol = get_protocol(protocol_id)
        validate_inputs(inputs)
        sessions = list(activities)
        bmr, get = _evaluate(protocol, inputs)

        get_with_activities = None
        if sessions and get is not None:
            get_with_activities = get + daily_activity_calories(
                sessions, inputs.weight
            )

        target_adjusted = None
        if target_weight is not None:
            if target_weight <= 0:
                raise InvalidInputError("target_weight", "must be positive")
            _, target_adjusted = _evaluate(
                protocol, replace(inputs, weight=target_weight)
            )
            if sessions and target_adjusted is not None:
                target_adjusted += daily_activity_calories(sessions, target_weight)

        result = EnergyProtocolResult(
            protocol_id=protocol.id,
            label=protocol.label,
            category=protocol.category,
            bmr=bmr,
            get=get,
            activity_factor=inputs.activity_factor,
            get_with_activities=get_with_activities,
            target_weight_adjusted_get=target_adjusted,
        )
        if self.debug:
            _logger.info("Energy protocol computed: %s", result)
        return result

    def compute_all_protocols(
        self, inputs: EnergyInputs
    ) -> list[EnergyProtocolResult]:
        """Compute every protocol the inputs allow."""
        validate_inputs(inputs)
        results = []
        for protocol in PROTOCOLS.values():
            if "lean_mass" in protocol.required_inputs and not _has_lean_mass(inputs):
                continue
            result = self.compute_protocol(protocol.id, inputs)
            if protocol.category is ProtocolCategory.BASAL and result.bmr is None:
                continue
            results.append(result)
        return results

    def adjust_for_goal(self, tdee: float, goal: Goal | str) -> float:
        """Shift a daily energy target for a weight goal."""
        goal = Goal(goal)
        if goal is Goal.LOSE:
            return tdee - self.goal_adjustment_kcal
        if goal is Goal.GAIN:
            return tdee + self.goal_adjustment_kcal
        return tdee


def get_protocol(protocol_id: str) -> EnergyProtocol:
    """Return the registry entry for an id or legacy alias."""
    key = str(protocol_id).strip().lower()
    protocol = PROTOCOLS.get(_ALIASES.get(key, key))
    if protocol is None:
        raise UnknownProtocolError(protocol_id)
    return protocol


def activity_level_for(factor: float) -> ActivityLevel:
    """Return the activity level matching a PAL multiplier."""
    for level in ActivityLevel:
        if math.isclose(level.factor, factor):
            return level
    raise InvalidInputError("activity_factor", f"unsupported factor {factor}")


def validate_inputs(inputs: EnergyInputs) -> None:
    """Reject missing or non-positive mandatory inputs."""
    for name in ("weight", "height", "age"):
        value = getattr(inputs, name)
        if value is None or value <= 0:
            raise InvalidInputError(name, "must be a positive number")
    if inputs.sex is None:
        raise InvalidInputError("sex", "is required")
    activity_level_for(inputs.activity_factor)


def session_calories(session: ExerciseSession, weight: float) -> float | None:
    """Return kcal burned in one session (MET × kg × hours)."""
    if session.minutes < 0:
        raise InvalidInputError("minutes", "must not be negative")
    met = session.met
    if met is None:
        exercise = EXERCISES.get(session.exercise_id)
        met = exercise.met if exercise else None
    if met is None:
        return None
    return met * weight * (session.minutes / 60)


def weekly_activity_calories(
    sessions: Iterable[ExerciseSession], weight: float
) -> float:
    """Return kcal burned per week by recurring sessions."""
    total = 0.0
    for session in sessions:
        if not 0 <= session.days_per_week <= DAYS_PER_WEEK:
            raise InvalidInputError("days_per_week", "must be between 0 and 7")
        per_session = session_calories(session, weight)
        if per_session is None:
            _logger.warning(
                "Skipping activity without MET value: %s", session.exercise_id
            )
            continue
        total += per_session * session.days_per_week
    return total


def daily_activity_calories(
    sessions: Iterable[ExerciseSession], weight: float
) -> float:
    """Return the weekly activity cost spread over seven days."""
    return weekly_activity_calories(sessions, weight) / DAYS_PER_WEEK


def recommend_protocol(
    inputs: EnergyInputs, results: Iterable[EnergyProtocolResult]
) -> str:
    """Pick the protocol id best suited to the patient profile."""
    available = [result.protocol_id for result in results]
    if _has_lean_mass(inputs):
        body_fat = (inputs.weight - inputs.lean_mass) / inputs.weight * 100
        if body_fat < ATHLETE_BODY_FAT_THRESHOLD:
            for protocol_id in available:
                if PROTOCOLS[protocol_id].athlete:
                    return protocol_id
    bmi = inputs.weight / (inputs.height / 100) ** 2
    if bmi > OVERWEIGHT_BMI:
        return "mifflin-st-jeor"
    if not inputs.is_male and "owen" in available:
        return "owen"
    return "mifflin-st-jeor"


def _evaluate(
    protocol: EnergyProtocol, inputs: EnergyInputs
) -> tuple[float | None, float | None]:
    value = protocol.compute(inputs)
    if protocol.category is ProtocolCategory.ENERGY_REQUIREMENT:
        return None, value
    if value is None:
        return None, None
    return value, value * inputs.activity_factor


def _has_lean_mass(inputs: EnergyInputs) -> bool:
    return inputs.lean_mass is not None and inputs.lean_mass > 0
