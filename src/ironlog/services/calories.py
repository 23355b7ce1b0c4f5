"""Unit conversion, BMR/maintenance and macro target calculations."""

import math

from ironlog.domain.targets import (
    BiometricInput,
    CalorieGoal,
    Gender,
    HeightUnit,
    MacroBreakdown,
    WeightUnit,
)

LBS_TO_KG = 0.453592
KG_TO_LBS = 2.20462
CM_PER_FOOT = 30.48
# Moderate activity, exercise 3-5 days per week.
ACTIVITY_MULTIPLIER = 1.55

CUT_PROTEIN_PER_KG = 2.2
BASE_PROTEIN_PER_KG = 1.8
CUT_FAT_PERCENT = 0.25
BASE_FAT_PERCENT = 0.30

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9


def convert_weight(
    value: float, from_unit: WeightUnit | str, to_unit: WeightUnit | str
) -> float:
    """Convert a weight between kg and lbs without rounding."""
    source = WeightUnit(from_unit)
    target = WeightUnit(to_unit)
    if source == target:
        return value
    if source == WeightUnit.LBS:
        return value * LBS_TO_KG
    return value * KG_TO_LBS


def convert_height(
    value: float, from_unit: HeightUnit | str, to_unit: HeightUnit | str
) -> float:
    """Convert a height between cm and decimal feet."""
    source = HeightUnit(from_unit)
    target = HeightUnit(to_unit)
    if source == target:
        return value
    if source == HeightUnit.FT:
        return value * CM_PER_FOOT
    return value / CM_PER_FOOT


def calculate_bmr(
    weight_kg: float, height_cm: float, age: int, gender: Gender | str
) -> float:
    """Return BMR (kcal/day) with the Mifflin-St Jeor equation.

    Female and other share the female constant. Inputs are not validated,
    so pathological values may produce a negative result.
    """
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if Gender(gender) == Gender.MALE:
        return base + 5
    return base - 161


def calculate_bmr_for(biometrics: BiometricInput) -> float:
    """Return BMR for a biometric record."""
    return calculate_bmr(
        biometrics.weight_kg, biometrics.height_cm, biometrics.age, biometrics.gender
    )


def calculate_maintenance(bmr: float) -> int:
    """Return maintenance calories at the fixed moderate activity level."""
    return round_half_up(bmr * ACTIVITY_MULTIPLIER)


def calculate_macros(
    calories: int, weight_kg: float, goal: CalorieGoal | str
) -> MacroBreakdown:
    """Split a calorie target into protein, fat and carb grams.

    Carbs take the remaining calories and saturate at zero when protein and
    fat already exceed the target.
    """
    cutting = CalorieGoal(goal).is_cutting
    protein_per_kg = CUT_PROTEIN_PER_KG if cutting else BASE_PROTEIN_PER_KG
    fat_percent = CUT_FAT_PERCENT if cutting else BASE_FAT_PERCENT

    protein = round_half_up(weight_kg * protein_per_kg)
    fats = round_half_up((calories * fat_percent) / KCAL_PER_G_FAT)
    remaining = calories - protein * KCAL_PER_G_PROTEIN - fats * KCAL_PER_G_FAT
    carbs = round_half_up(max(0, remaining / KCAL_PER_G_CARBS))
    return MacroBreakdown(calories=calories, protein=protein, carbs=carbs, fats=fats)


def get_calorie_target(
    maintenance: int, goal: CalorieGoal | str, custom_calories: int | None = None
) -> int:
    """Return the daily calorie target for a goal.

    A custom goal without a positive value falls back to maintenance.
    """
    resolved = CalorieGoal(goal)
    if resolved == CalorieGoal.CUSTOM and custom_calories:
        return custom_calories
    return maintenance + resolved.offset


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up; non-finite passes through."""
    if not math.isfinite(value):
        return value  # type: ignore[return-value]
    return math.floor(value + 0.5)
