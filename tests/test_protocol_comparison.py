"""Tests for protocol comparison and energy records."""

import pytest

from nutrition_engine.domain.energy import (
    EnergyInputs,
    EnergyProtocolResult,
    ExerciseSession,
    ProtocolCategory,
)
from nutrition_engine.services.comparison import build_energy_record, compare_protocols
from nutrition_engine.services.energy import EnergyService


def _basal(protocol_id: str, bmr: float | None) -> EnergyProtocolResult:
    return EnergyProtocolResult(
        protocol_id=protocol_id,
        label=protocol_id,
        category=ProtocolCategory.BASAL,
        bmr=bmr,
        get=None if bmr is None else bmr * 1.2,
        activity_factor=1.2,
    )


def test_deviation_from_mean_bmr() -> None:
    results = [
        _basal("harris-benedict", 1500),
        _basal("mifflin-st-jeor", 1600),
        _basal("cunningham", 1700),
    ]

    comparison = compare_protocols(results, 1.2)

    assert comparison.mean_bmr == pytest.approx(1600)
    assert [entry.diff_percent for entry in comparison.entries] == [-6, 0, 6]
    assert [entry.get for entry in comparison.entries] == [1800, 1920, 2040]
    assert comparison.excluded == []


def test_deviation_rounds_halves_up() -> None:
    results = [_basal("harris-benedict", 1990), _basal("mifflin-st-jeor", 2010)]

    comparison = compare_protocols(results, 1.25)

    assert [entry.diff_percent for entry in comparison.entries] == [0, 1]
    assert [entry.get for entry in comparison.entries] == [2488, 2513]


def test_entries_carry_protocol_flags() -> None:
    results = [_basal("mifflin-st-jeor", 1600), _basal("cunningham", 1700)]

    entries = compare_protocols(results, 1.2).entries

    assert entries[0].recommended is True
    assert entries[0].athlete is False
    assert entries[1].athlete is True


def test_results_without_bmr_are_excluded() -> None:
    eer = EnergyProtocolResult(
        protocol_id="eer-iom-2005",
        label="EER/IOM (2005)",
        category=ProtocolCategory.ENERGY_REQUIREMENT,
        bmr=None,
        get=2500,
        activity_factor=1.2,
    )
    results = [_basal("owen", None), eer, _basal("schofield", 1500)]

    comparison = compare_protocols(results, 1.2)

    assert comparison.mean_bmr == pytest.approx(1500)
    assert [entry.protocol_id for entry in comparison.entries] == ["schofield"]
    assert comparison.excluded == ["owen", "eer-iom-2005"]


def test_comparison_without_basal_results() -> None:
    comparison = compare_protocols([_basal("owen", None)], 1.55)

    assert comparison.mean_bmr is None
    assert comparison.entries == []
    assert comparison.activity_factor == 1.55


def test_comparison_of_computed_protocols(
    energy_service: EnergyService, male_inputs: EnergyInputs
) -> None:
    results = energy_service.compute_all_protocols(male_inputs)

    comparison = compare_protocols(results, male_inputs.activity_factor)

    assert len(comparison.entries) == 5
    assert len(comparison.excluded) == 3
    assert abs(sum(entry.diff_percent for entry in comparison.entries)) <= 2


def test_build_energy_record(
    energy_service: EnergyService, male_inputs: EnergyInputs
) -> None:
    running = ExerciseSession(exercise_id="running-light", minutes=60, days_per_week=3)
    result = energy_service.compute_protocol(
        "mifflin", male_inputs, activities=[running], target_weight=70
    )

    record = build_energy_record(42, result, [running], target_weight=70)

    assert record.patient_id == "42"
    assert record.protocol == "mifflin-st-jeor"
    assert record.tmb == pytest.approx(1780)
    assert record.get == pytest.approx(2759)
    assert record.get_with_activities == pytest.approx(result.get_with_activities)
    assert record.activity_level == 1.55
    assert record.target_weight == 70
    assert record.venta_adjusted == pytest.approx(2844)
    dumped = record.model_dump(by_alias=True)
    assert dumped["activities"] == [
        {"exerciseId": "running-light", "minutes": 60, "daysPerWeek": 3, "met": None}
    ]


def test_build_energy_record_without_activities(
    energy_service: EnergyService, male_inputs: EnergyInputs
) -> None:
    result = energy_service.compute_protocol("eer-iom-2005", male_inputs)

    record = build_energy_record("p-1", result)

    assert record.tmb is None
    assert record.activities is None
    assert record.venta_adjusted is None
