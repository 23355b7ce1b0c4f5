"""Daily progress score engine with local and AI strategies."""

import logging
import math
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Protocol
from uuid import UUID

from ironlog.domain.models import DailyIntake, UserProfile, WeightEntry
from ironlog.domain.scoring import (
    DEFAULT_SCORE,
    MAX_SCORE,
    MIN_SCORE,
    DailyAdherenceInput,
    DailyScore,
    ScoreSource,
)
from ironlog.services.profiles import ProfileNotFoundError, ProfileRepository
from ironlog.services.calories import convert_weight
from ironlog.services.splits import is_rest_day

BASE_SCORE = 50.0
STREAK_BONUS_PER_DAY = 0.5
STREAK_BONUS_CAP = 10.0
STREAK_LOOKBACK_DAYS = 365

_NUMBER_PATTERN = re.compile(r"[-+]?(?:\d+(?:\.\d+)?|\.\d+)(?:[eE][-+]?\d+)?")

_logger = logging.getLogger(__name__)


class ScoreStrategy(Protocol):
    """Interface for computing a day's progress score."""

    source: ScoreSource

    async def score(self, data: DailyAdherenceInput) -> float:
        """Return a score in [0, 100] rounded to 2 decimals."""


class ScoreClient(Protocol):
    """Interface for the LLM that grades a day from a text prompt."""

    async def complete(self, prompt: str) -> str:
        """Return the raw text reply for a prompt."""


class DailyLogRepository(Protocol):
    """Persistence interface for per-day logs."""

    def get_intake(self, user_id: UUID, day: date) -> DailyIntake:
        """Return summed food log macros for a day."""

    def get_water_ml(self, user_id: UUID, day: date) -> int:
        """Return water logged for a day."""

    def has_completed_workout(self, user_id: UUID, day: date) -> bool:
        """Return True when a completed workout was logged for the day."""

    def list_active_days(self, user_id: UUID, start: date, end: date) -> set[date]:
        """Return days in [start, end] with any food or workout logged."""

    def get_weight_before(self, user_id: UUID, day: date) -> WeightEntry | None:
        """Return the most recent weight entry recorded before a day."""

    def set_progress_score(self, user_id: UUID, day: date, score: float) -> None:
        """Overwrite the stored progress score for a day."""


def calculate_progress_score_local(data: DailyAdherenceInput) -> float:
    """Score a day with the fixed rule table."""
    score = BASE_SCORE

    calorie_diff = abs(data.calories_consumed - data.calorie_target)
    if calorie_diff <= 100:  # noqa: PLR2004
        score += 15
    elif calorie_diff <= 300:  # noqa: PLR2004
        score += 5
    else:
        score -= 10

    protein_ratio = data.protein_consumed / (data.protein_target or 1)
    if 0.9 <= protein_ratio <= 1.1:  # noqa: PLR2004
        score += 15
    elif protein_ratio >= 0.7:  # noqa: PLR2004
        score += 5
    else:
        score -= 10

    water_ratio = data.water_consumed / (data.water_target or 1)
    if water_ratio >= 1:
        score += 10
    elif water_ratio >= 0.7:  # noqa: PLR2004
        score += 5
    elif water_ratio < 0.3:  # noqa: PLR2004
        score -= 10

    if data.is_rest_day:
        score += 5
    elif data.worked_out:
        score += 25
    else:
        score -= 15

    goal_diff = abs(data.current_weight - data.goal_weight)
    previous_diff = abs(data.previous_weight - data.goal_weight)
    if goal_diff < previous_diff:
        score += 5

    score += min(data.streak_days * STREAK_BONUS_PER_DAY, STREAK_BONUS_CAP)

    return clamp_score(score)


def clamp_score(score: float) -> float:
    """Clamp a score into [0, 100] and round to 2 decimals."""
    return round(min(MAX_SCORE, max(MIN_SCORE, score)), 2)


def build_score_prompt(data: DailyAdherenceInput) -> str:
    """Build the grading prompt for the AI strategy."""
    # The rubric caps the streak bonus at +25 while the local rules cap it at
    # +10. Both are kept as-is until product settles on one value.
    return (
        "You are a fitness progress evaluator. Based on the following daily data, "
        "calculate a progress score from 0.00 to 100.00.\n\n"
        "Data:\n"
        f"- Calorie target: {_fmt(data.calorie_target)}, "
        f"consumed: {_fmt(data.calories_consumed)}\n"
        f"- Protein target: {_fmt(data.protein_target)}g, "
        f"consumed: {_fmt(data.protein_consumed)}g\n"
        f"- Water target: {_fmt(data.water_target)}ml, "
        f"consumed: {_fmt(data.water_consumed)}ml\n"
        f"- Worked out today: {_fmt_bool(data.worked_out)}\n"
        f"- Is rest day: {_fmt_bool(data.is_rest_day)}\n"
        f"- Current weight: {_fmt(data.current_weight)}, "
        f"goal weight: {_fmt(data.goal_weight)}, "
        f"previous weight: {_fmt(data.previous_weight)}\n"
        f"- Consistency streak: {data.streak_days} days\n\n"
        "Scoring guidelines:\n"
        "- Hitting calorie target (±100 kcal): +15 points\n"
        "- Hitting protein target (±10g): +15 points\n"
        "- Adequate water (≥ target): +10 points\n"
        "- Completed workout on non-rest day: +25 points\n"
        "- Being on a rest day and resting: +25 points\n"
        "- Weight moving toward goal: +10 points\n"
        "- Streak bonus: +0.5 per day (max +25)\n\n"
        "Penalties:\n"
        "- Missing gym on non-rest day: -25 points\n"
        "- Way off calorie target (>300 kcal): -10 points\n"
        "- Low protein (<50% target): -10 points\n"
        "- No water logged: -10 points\n\n"
        "Respond with ONLY a single number (the score, 0.00 to 100.00), "
        "nothing else."
    )


def parse_score(text: str) -> float:
    """Extract a score from free text, falling back to the default score.

    A reply that is a bare number is taken whole; otherwise the first number
    in the text is used.
    """
    cleaned = (text or "").strip()
    try:
        value = float(cleaned)
    except ValueError:
        match = _NUMBER_PATTERN.search(cleaned)
        if match is None:
            _logger.info("Score reply has no number: %r", cleaned[:80])
            return DEFAULT_SCORE
        value = float(match.group())
    if not math.isfinite(value) or not MIN_SCORE <= value <= MAX_SCORE:
        _logger.info("Score reply out of range: %s", value)
        return DEFAULT_SCORE
    return clamp_score(value)


@dataclass
class LocalScoreStrategy:
    """Deterministic rule-based scoring with no I/O."""

    source: ScoreSource = ScoreSource.LOCAL

    async def score(self, data: DailyAdherenceInput) -> float:
        """Return the rule-based score."""
        return calculate_progress_score_local(data)


@dataclass
class AIScoreStrategy:
    """Scoring delegated to an LLM; any failure yields the default score."""

    client: ScoreClient
    source: ScoreSource = ScoreSource.AI

    async def score(self, data: DailyAdherenceInput) -> float:
        """Return the AI-graded score or the default on failure."""
        try:
            text = await self.client.complete(build_score_prompt(data))
        except Exception:
            _logger.warning("AI scoring failed, using default score", exc_info=True)
            return DEFAULT_SCORE
        return parse_score(text)


@dataclass
class ProgressScoreService:
    """Builds daily adherence snapshots, scores them and stores the result."""

    profile_repository: ProfileRepository
    daily_log_repository: DailyLogRepository
    ai_client_factory: Callable[[str], ScoreClient]
    default_api_key: str | None = None
    local_strategy: LocalScoreStrategy = field(default_factory=LocalScoreStrategy)

    def select_strategy(self, api_key: str | None) -> ScoreStrategy:
        """Return the AI strategy when a credential is configured."""
        credential = api_key or self.default_api_key
        if credential:
            return AIScoreStrategy(client=self.ai_client_factory(credential))
        return self.local_strategy

    def build_adherence(self, profile: UserProfile, day: date) -> DailyAdherenceInput:
        """Assemble the adherence snapshot for one user-day."""
        repository = self.daily_log_repository
        intake = repository.get_intake(profile.id, day)
        previous = repository.get_weight_before(profile.id, day)
        previous_weight = (
            convert_weight(previous.weight, previous.unit, profile.weight_unit)
            if previous is not None
            else profile.current_weight
        )
        return DailyAdherenceInput(
            calorie_target=profile.calorie_target,
            calories_consumed=intake.calories,
            protein_target=profile.protein_target,
            protein_consumed=intake.protein,
            water_target=profile.water_target,
            water_consumed=repository.get_water_ml(profile.id, day),
            worked_out=repository.has_completed_workout(profile.id, day),
            is_rest_day=is_rest_day(profile.workout_split, day),
            current_weight=profile.current_weight,
            goal_weight=profile.goal_weight,
            previous_weight=previous_weight,
            streak_days=self.streak_days(profile.id, day),
        )

    def streak_days(self, user_id: UUID, day: date) -> int:
        """Count consecutive active days ending at the given day."""
        start = day - timedelta(days=STREAK_LOOKBACK_DAYS)
        active = self.daily_log_repository.list_active_days(user_id, start, day)
        cursor = day if day in active else day - timedelta(days=1)
        streak = 0
        while cursor in active and cursor >= start:
            streak += 1
            cursor -= timedelta(days=1)
        return streak

    async def score_day(self, user_id: UUID, day: date) -> DailyScore:
        """Compute and persist the progress score for a user-day."""
        profile = self.profile_repository.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        data = self.build_adherence(profile, day)
        strategy = self.select_strategy(profile.ai_api_key)
        score = await strategy.score(data)
        self.daily_log_repository.set_progress_score(user_id, day, score)
        self.profile_repository.set_progress_score(user_id, score)
        _logger.info(
            "Scored day: user=%s day=%s score=%s source=%s",
            user_id,
            day.isoformat(),
            score,
            strategy.source,
        )
        return DailyScore(day=day, score=score, source=strategy.source)


def _fmt(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _fmt_bool(value: bool) -> str:
    return "true" if value else "false"
