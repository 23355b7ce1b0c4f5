"""Domain models for daily progress scoring."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

DEFAULT_SCORE = 50.0
MIN_SCORE = 0.0
MAX_SCORE = 100.0


class ScoreSource(StrEnum):
    """Which strategy produced a score."""

    LOCAL = "local"
    AI = "ai"


@dataclass(frozen=True)
class DailyAdherenceInput:
    """One user-day of adherence data."""

    calorie_target: float
    calories_consumed: float
    protein_target: float
    protein_consumed: float
    water_target: float
    water_consumed: float
    worked_out: bool
    is_rest_day: bool
    current_weight: float
    goal_weight: float
    previous_weight: float
    streak_days: int


@dataclass(frozen=True)
class DailyScore:
    """Progress score computed for a single day."""

    day: date
    score: float
    source: ScoreSource
