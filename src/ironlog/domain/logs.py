"""Domain models for food, water, workout and weight logging."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from ironlog.domain.targets import WeightUnit


class MealType(StrEnum):
    """Meal slot a food entry belongs to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"
    PRE_WORKOUT = "pre_workout"
    POST_WORKOUT = "post_workout"


class FoodInputMode(StrEnum):
    """How a food entry was produced."""

    MANUAL = "manual"
    TEXT_AI = "text_ai"
    PHOTO_AI = "photo_ai"
    PHOTO_TEXT_AI = "photo_text_ai"


class WorkoutInputMode(StrEnum):
    """How a workout entry was produced."""

    MANUAL = "manual"
    AI = "ai"


class SetType(StrEnum):
    """Kind of exercise set."""

    WARMUP = "warmup"
    WORKING = "working"
    DROPSET = "dropset"
    FAILURE = "failure"


@dataclass(frozen=True)
class FoodLogEntry:
    """A food item to add to a day."""

    meal_type: MealType
    food_name: str
    calories: float
    protein: float
    carbs: float
    fats: float
    serving_size: str | None = None
    input_mode: FoodInputMode = FoodInputMode.MANUAL
    ai_prompt: str | None = None


@dataclass(frozen=True)
class ExerciseSetEntry:
    """One set; a missing unit means the profile's weight unit."""

    reps: int
    weight: float
    weight_unit: WeightUnit | None = None
    set_type: SetType = SetType.WORKING


@dataclass(frozen=True)
class WorkoutExerciseEntry:
    """An exercise and its sets, in performed order."""

    name: str
    body_part: str
    sets: tuple[ExerciseSetEntry, ...] = ()
    notes: str | None = None


@dataclass(frozen=True)
class WorkoutEntry:
    """A completed workout session."""

    exercises: tuple[WorkoutExerciseEntry, ...]
    notes: str | None = None
    input_mode: WorkoutInputMode = WorkoutInputMode.MANUAL
    started_at: datetime | None = None
