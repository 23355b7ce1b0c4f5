"""Domain models for biometrics and nutrition targets."""

from dataclasses import dataclass
from enum import StrEnum


class Gender(StrEnum):
    """Gender options collected during onboarding."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class WeightUnit(StrEnum):
    """Supported body weight units."""

    KG = "kg"
    LBS = "lbs"


class HeightUnit(StrEnum):
    """Supported height units. Feet are decimal feet (5.9 ft), not feet+inches."""

    CM = "cm"
    FT = "ft"


class CalorieGoal(StrEnum):
    """Calorie goal phases with a fixed daily offset from maintenance."""

    MAINTENANCE = "maintenance"
    LOW_CUT = "low_cut"
    MID_CUT = "mid_cut"
    HIGH_CUT = "high_cut"
    LEAN_BULK = "lean_bulk"
    MID_BULK = "mid_bulk"
    AGGRESSIVE_BULK = "aggressive_bulk"
    CUSTOM = "custom"

    @property
    def offset(self) -> int:
        """Signed kcal/day offset from maintenance (zero for custom)."""
        return CALORIE_GOAL_OFFSETS.get(self, 0)

    @property
    def is_cutting(self) -> bool:
        """Return True for calorie deficit goals."""
        return self in _CUTTING_GOALS


CALORIE_GOAL_OFFSETS: dict[CalorieGoal, int] = {
    CalorieGoal.MAINTENANCE: 0,
    CalorieGoal.LOW_CUT: -250,
    CalorieGoal.MID_CUT: -500,
    CalorieGoal.HIGH_CUT: -750,
    CalorieGoal.LEAN_BULK: 250,
    CalorieGoal.MID_BULK: 500,
    CalorieGoal.AGGRESSIVE_BULK: 750,
}

_CUTTING_GOALS = frozenset(
    {CalorieGoal.LOW_CUT, CalorieGoal.MID_CUT, CalorieGoal.HIGH_CUT}
)


@dataclass(frozen=True)
class BiometricInput:
    """Biometrics in metric units used for BMR."""

    weight_kg: float
    height_cm: float
    age: int
    gender: Gender


@dataclass(frozen=True)
class MacroBreakdown:
    """Daily calorie and macronutrient gram targets."""

    calories: int
    protein: int
    carbs: int
    fats: int
