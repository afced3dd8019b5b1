"""Side-by-side comparison of energy protocols."""

from collections.abc import Iterable

from nutrition_engine.domain.energy import (
    EnergyProtocolResult,
    ExerciseSession,
    ProtocolComparison,
    ProtocolDeviation,
)
from nutrition_engine.schemas import ActivityEntry, EnergyExpenditureRecord
from nutrition_engine.services.energy import PROTOCOLS
from nutrition_engine.services.macros import round_half_up


def compare_protocols(
    results: Iterable[EnergyProtocolResult], activity_factor: float
) -> ProtocolComparison:
    """Return the mean BMR and each protocol's deviation from it.

    Only results with a positive BMR take part; the others (missing inputs,
    energy-requirement protocols) are listed in ``excluded``.
    """
    included: list[EnergyProtocolResult] = []
    excluded: list[str] = []
    for result in results:
        if result.bmr is not None and result.bmr > 0:
            included.append(result)
        else:
            excluded.append(result.protocol_id)

    if not included:
        return ProtocolComparison(
            mean_bmr=None, activity_factor=activity_factor, excluded=excluded
        )

    mean_bmr = sum(result.bmr for result in included) / len(included)
    entries = []
    for result in included:
        protocol = PROTOCOLS.get(result.protocol_id)
        entries.append(
            ProtocolDeviation(
                protocol_id=result.protocol_id,
                label=result.label,
                bmr=result.bmr,
                get=round_half_up(result.bmr * activity_factor),
                diff_percent=round_half_up(
                    (result.bmr - mean_bmr) / mean_bmr * 100
                ),
                recommended=bool(protocol and protocol.recommended),
                athlete=bool(protocol and protocol.athlete),
            )
        )
    return ProtocolComparison(
        mean_bmr=mean_bmr,
        activity_factor=activity_factor,
        entries=entries,
        excluded=excluded,
    )


def build_energy_record(
    patient_id: str,
    result: EnergyProtocolResult,
    activities: Iterable[ExerciseSession] = (),
    target_weight: float | None = None,
) -> EnergyExpenditureRecord:
    """Package the selected protocol result as the patient's energy record."""
    entries = [
        ActivityEntry(
            exercise_id=session.exercise_id,
            minutes=session.minutes,
            days_per_week=session.days_per_week,
            met=session.met,
        )
        for session in activities
    ]
    return EnergyExpenditureRecord(
        patient_id=str(patient_id),
        protocol=result.protocol_id,
        tmb=result.bmr,
        get=result.get,
        get_with_activities=result.get_with_activities,
        activity_level=result.activity_factor,
        activities=entries or None,
        target_weight=target_weight,
        venta_adjusted=result.target_weight_adjusted_get,
    )
