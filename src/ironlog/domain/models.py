"""Domain models for user profiles and daily logs."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from ironlog.domain.targets import Gender, HeightUnit, WeightUnit


@dataclass(frozen=True)
class UserProfile:
    """Represents a user profile stored in the database."""

    id: UUID
    username: str
    age: int
    gender: Gender
    height: float
    height_unit: HeightUnit
    start_weight: float
    current_weight: float
    goal_weight: float
    weight_unit: WeightUnit
    calorie_target: int
    protein_target: int
    carb_target: int
    fat_target: int
    water_target: int
    workout_split: dict[str, list[str]] = field(default_factory=dict)
    progress_score: float = 50.0
    ai_api_key: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class DailyLogRecord:
    """Daily log row for a user."""

    id: UUID
    user_id: UUID
    day: date
    water_ml: int
    progress_score: float


@dataclass(frozen=True)
class DailyIntake:
    """Summed food log macros for a day."""

    calories: float
    protein: float
    carbs: float
    fats: float


@dataclass(frozen=True)
class WeightEntry:
    """Recorded body weight."""

    weight: float
    unit: WeightUnit
    recorded_at: datetime
