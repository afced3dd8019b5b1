"""Macronutrient targets and weight-change projections."""

import math

from nutrition_engine.domain.energy import MacroTargets, WeightProjection

WEEKS_PER_MONTH = 4.33


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def distribute_macros(
    target_kcal: float,
    weight: float,
    protein_g_per_kg: float = 1.8,
    fat_percent: float = 25.0,
) -> MacroTargets:
    """Split a calorie target into protein, fat and carbohydrate grams.

    Protein is set per kg of body weight, fat as a share of calories and
    carbohydrates take whatever energy remains.
    """
    protein_g = weight * protein_g_per_kg
    fat_kcal = target_kcal * fat_percent / 100
    carbs_kcal = max(target_kcal - protein_g * 4 - fat_kcal, 0.0)
    return MacroTargets(
        calories=round_half_up(target_kcal),
        protein_g=round_half_up(protein_g),
        fat_g=round_half_up(fat_kcal / 9),
        carbs_g=round_half_up(carbs_kcal / 4),
    )


def project_weight_change(
    daily_balance_kcal: float,
    kcal_per_kg: float = 7700.0,
    variation: float = 0.1,
) -> WeightProjection:
    """Project weight change from a daily energy balance.

    A negative balance is a deficit (weight loss).
    """
    weekly = abs(daily_balance_kcal) * 7 / kcal_per_kg
    spread = weekly * variation
    return WeightProjection(
        is_loss=daily_balance_kcal < 0,
        weekly_kg=weekly,
        weekly_min_kg=max(0.0, weekly - spread),
        weekly_max_kg=weekly + spread,
        monthly_kg=weekly * WEEKS_PER_MONTH,
    )
