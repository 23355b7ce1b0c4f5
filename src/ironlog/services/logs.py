"""Food, water, workout and weight logging plus history and export."""

import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass, replace
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from ironlog.domain.logs import FoodLogEntry, WorkoutEntry
from ironlog.domain.models import DailyLogRecord, UserProfile
from ironlog.domain.targets import WeightUnit
from ironlog.services.calories import convert_weight
from ironlog.services.profiles import ProfileNotFoundError, ProfileRepository

DEFAULT_HISTORY_DAYS = 30

_logger = logging.getLogger(__name__)


class ActivityLogRepository(Protocol):
    """Persistence interface for writing and listing daily activity."""

    def ensure_daily_log(self, user_id: UUID, day: date) -> DailyLogRecord:
        """Return the daily log for a user-day, creating it when missing."""

    def add_food_log(
        self,
        user_id: UUID,
        daily_log_id: UUID,
        entry: FoodLogEntry,
        logged_at: datetime,
    ) -> UUID:
        """Store a food entry and return its id."""

    def set_water_ml(self, daily_log_id: UUID, water_ml: int) -> None:
        """Overwrite the water total of a daily log."""

    def add_workout_log(
        self,
        user_id: UUID,
        daily_log_id: UUID,
        entry: WorkoutEntry,
        completed_at: datetime,
    ) -> UUID:
        """Store a workout with its exercises and sets and return its id."""

    def add_weight_entry(
        self, user_id: UUID, weight: float, unit: WeightUnit, recorded_at: datetime
    ) -> None:
        """Append a body weight measurement."""

    def list_daily_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyLogRecord]:
        """Return daily logs in [start, end], oldest first."""

    def export_rows(self, user_id: UUID) -> dict[str, list[dict[str, object]]]:
        """Return every daily, food and workout row owned by a user."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class LogService:
    """Application service for recording a user's day."""

    repository: ActivityLogRepository
    profile_repository: ProfileRepository
    clock: Callable[[], datetime] = _utcnow

    def log_food(self, user_id: UUID, day: date, entry: FoodLogEntry) -> UUID:
        """Add a food entry to a day."""
        self._profile(user_id)
        daily_log = self.repository.ensure_daily_log(user_id, day)
        food_log_id = self.repository.add_food_log(
            user_id, daily_log.id, entry, self.clock()
        )
        _logger.info(
            "Food logged: user=%s day=%s calories=%s mode=%s",
            user_id,
            day.isoformat(),
            entry.calories,
            entry.input_mode,
        )
        return food_log_id

    def log_water(self, user_id: UUID, day: date, amount_ml: int) -> int:
        """Add water to a day and return the new total, never below zero."""
        self._profile(user_id)
        daily_log = self.repository.ensure_daily_log(user_id, day)
        total = max(0, daily_log.water_ml + amount_ml)
        self.repository.set_water_ml(daily_log.id, total)
        return total

    def log_workout(self, user_id: UUID, day: date, entry: WorkoutEntry) -> UUID:
        """Store a completed workout; sets without a unit use the profile's."""
        if not entry.exercises:
            raise ValueError("A workout needs at least one exercise")
        profile = self._profile(user_id)
        resolved = replace(
            entry,
            exercises=tuple(
                replace(
                    exercise,
                    sets=tuple(
                        replace(
                            workout_set,
                            weight_unit=workout_set.weight_unit or profile.weight_unit,
                        )
                        for workout_set in exercise.sets
                    ),
                )
                for exercise in entry.exercises
            ),
        )
        daily_log = self.repository.ensure_daily_log(user_id, day)
        workout_id = self.repository.add_workout_log(
            user_id, daily_log.id, resolved, self.clock()
        )
        _logger.info(
            "Workout logged: user=%s day=%s exercises=%s",
            user_id,
            day.isoformat(),
            len(resolved.exercises),
        )
        return workout_id

    def log_weight(
        self,
        user_id: UUID,
        weight: float,
        unit: WeightUnit | None = None,
        recorded_at: datetime | None = None,
    ) -> float:
        """Record a weigh-in and return it in the profile's unit."""
        profile = self._profile(user_id)
        resolved_unit = unit or profile.weight_unit
        self.repository.add_weight_entry(
            user_id, weight, resolved_unit, recorded_at or self.clock()
        )
        current = convert_weight(weight, resolved_unit, profile.weight_unit)
        self.profile_repository.set_current_weight(user_id, current)
        return current

    def history(self, user_id: UUID, start: date, end: date) -> list[DailyLogRecord]:
        """Return per-day water and score records for a date range."""
        if start > end:
            raise ValueError("History start must not be after its end")
        return self.repository.list_daily_logs(user_id, start, end)

    def export(self, user_id: UUID) -> dict[str, object]:
        """Return the user's profile and logs as plain data."""
        profile = asdict(self._profile(user_id))
        profile.pop("ai_api_key", None)
        return {
            "profile": profile,
            **self.repository.export_rows(user_id),
            "exported_at": self.clock().isoformat(),
        }

    def _profile(self, user_id: UUID) -> UserProfile:
        profile = self.profile_repository.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return profile
