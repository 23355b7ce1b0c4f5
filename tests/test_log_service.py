"""Tests for food, water, workout and weight logging."""

import asyncio
from datetime import UTC, date, datetime, timedelta
from uuid import uuid4

import pytest

from ironlog.domain.logs import (
    ExerciseSetEntry,
    FoodLogEntry,
    MealType,
    WorkoutEntry,
    WorkoutExerciseEntry,
)
from ironlog.domain.targets import WeightUnit
from ironlog.services.logs import LogService
from ironlog.services.profiles import ProfileNotFoundError
from ironlog.services.scoring import (
    ProgressScoreService,
    calculate_progress_score_local,
)
from tests.conftest import (
    FakeScoreClient,
    InMemoryDailyLogRepository,
    InMemoryProfileRepository,
    RecordingClientFactory,
    make_profile,
)

DAY = date(2026, 10, 19)
NOW = datetime(2026, 10, 19, 18, 30, tzinfo=UTC)

LUNCH = FoodLogEntry(
    meal_type=MealType.LUNCH,
    food_name="Chicken rice bowl",
    calories=650,
    protein=45,
    carbs=70,
    fats=18,
)


def _service(
    profiles: InMemoryProfileRepository, logs: InMemoryDailyLogRepository
) -> LogService:
    return LogService(repository=logs, profile_repository=profiles, clock=lambda: NOW)


def _seeded(**overrides: object):  # type: ignore[no-untyped-def]
    profiles = InMemoryProfileRepository()
    logs = InMemoryDailyLogRepository()
    profile = make_profile(**overrides)
    profiles.upsert_profile(profile)
    return profile, profiles, logs


def test_log_food_accumulates_intake() -> None:
    profile, profiles, logs = _seeded()
    service = _service(profiles, logs)

    service.log_food(profile.id, DAY, LUNCH)
    service.log_food(profile.id, DAY, LUNCH)

    assert logs.intake[DAY].calories == 1300
    assert logs.intake[DAY].protein == 90
    assert DAY in logs.active_days
    assert logs.food_logs[0][2] == NOW
    assert len(logs.log_ids) == 1


def test_log_water_adds_and_never_goes_negative() -> None:
    profile, profiles, logs = _seeded()
    service = _service(profiles, logs)

    assert service.log_water(profile.id, DAY, 500) == 500
    assert service.log_water(profile.id, DAY, 250) == 750
    assert service.log_water(profile.id, DAY, -2000) == 0
    assert logs.water[DAY] == 0


def test_log_workout_fills_missing_set_units_from_profile() -> None:
    profile, profiles, logs = _seeded(weight_unit=WeightUnit.LBS)
    entry = WorkoutEntry(
        exercises=(
            WorkoutExerciseEntry(
                name="Deadlift",
                body_part="Back",
                sets=(
                    ExerciseSetEntry(reps=5, weight=315),
                    ExerciseSetEntry(reps=5, weight=140, weight_unit=WeightUnit.KG),
                ),
            ),
        )
    )

    _service(profiles, logs).log_workout(profile.id, DAY, entry)

    stored = logs.workout_logs[0][1]
    units = [workout_set.weight_unit for workout_set in stored.exercises[0].sets]
    assert units == [WeightUnit.LBS, WeightUnit.KG]
    assert DAY in logs.workouts
    assert logs.has_completed_workout(profile.id, DAY) is True


def test_log_workout_requires_an_exercise() -> None:
    profile, profiles, logs = _seeded()

    with pytest.raises(ValueError, match="at least one exercise"):
        _service(profiles, logs).log_workout(profile.id, DAY, WorkoutEntry(()))

    assert logs.log_ids == {}


def test_log_weight_converts_to_profile_unit() -> None:
    profile, profiles, logs = _seeded(current_weight=79.0)

    current = _service(profiles, logs).log_weight(profile.id, 176.0, WeightUnit.LBS)

    assert current == pytest.approx(79.8322, rel=1e-4)
    assert profiles.profiles[profile.id].current_weight == current
    when, entry = logs.weights[0]
    assert when == DAY
    assert entry.weight == 176.0
    assert entry.unit == WeightUnit.LBS


def test_log_weight_defaults_to_profile_unit_and_now() -> None:
    profile, profiles, logs = _seeded()

    current = _service(profiles, logs).log_weight(profile.id, 78.5)

    assert current == 78.5
    assert logs.weights[0][1].unit == WeightUnit.KG
    assert logs.weights[0][1].recorded_at == NOW


def test_logged_weight_feeds_the_trend_bonus() -> None:
    profile, profiles, logs = _seeded(current_weight=80.0, goal_weight=75.0)
    log_service = _service(profiles, logs)
    scorer = ProgressScoreService(
        profile_repository=profiles,
        daily_log_repository=logs,
        ai_client_factory=RecordingClientFactory(FakeScoreClient()),
    )
    log_service.log_weight(profile.id, 80.0, recorded_at=NOW - timedelta(days=2))
    log_service.log_weight(profile.id, 79.2, recorded_at=NOW)
    updated = profiles.profiles[profile.id]

    data = scorer.build_adherence(updated, DAY)
    without_history = scorer.build_adherence(updated, DAY - timedelta(days=3))

    assert data.previous_weight == 80.0
    assert data.current_weight == 79.2
    assert without_history.previous_weight == 79.2
    assert calculate_progress_score_local(data) == (
        calculate_progress_score_local(without_history) + 5
    )


def test_history_lists_logged_days_in_range() -> None:
    profile, profiles, logs = _seeded()
    service = _service(profiles, logs)
    for offset in (0, 3, 40):
        service.log_water(profile.id, DAY - timedelta(days=offset), 1000)

    records = service.history(profile.id, DAY - timedelta(days=30), DAY)

    assert [record.day for record in records] == [DAY - timedelta(days=3), DAY]
    assert all(record.water_ml == 1000 for record in records)


def test_history_rejects_reversed_range() -> None:
    _, profiles, logs = _seeded()

    with pytest.raises(ValueError):
        _service(profiles, logs).history(uuid4(), DAY, DAY - timedelta(days=1))


def test_export_includes_logs_without_ai_key() -> None:
    profile, profiles, logs = _seeded(ai_api_key="sk-secret")
    service = _service(profiles, logs)
    service.log_food(profile.id, DAY, LUNCH)

    exported = service.export(profile.id)

    assert "ai_api_key" not in exported["profile"]  # type: ignore[operator]
    assert exported["food_logs"] == [
        {"date": "2026-10-19", "food_name": "Chicken rice bowl"}
    ]
    assert exported["exported_at"] == NOW.isoformat()


def test_logging_requires_profile() -> None:
    service = _service(InMemoryProfileRepository(), InMemoryDailyLogRepository())
    missing = uuid4()

    with pytest.raises(ProfileNotFoundError):
        service.log_food(missing, DAY, LUNCH)
    with pytest.raises(ProfileNotFoundError):
        service.log_water(missing, DAY, 250)
    with pytest.raises(ProfileNotFoundError):
        service.log_weight(missing, 80.0)
    with pytest.raises(ProfileNotFoundError):
        service.export(missing)


def test_logged_day_scores_with_logged_activity() -> None:
    profile, profiles, logs = _seeded(workout_split={"monday": ["Chest"]})
    service = _service(profiles, logs)
    service.log_food(profile.id, DAY, LUNCH)
    service.log_workout(
        profile.id,
        DAY,
        WorkoutEntry(exercises=(WorkoutExerciseEntry("Bench Press", "Chest"),)),
    )
    scorer = ProgressScoreService(
        profile_repository=profiles,
        daily_log_repository=logs,
        ai_client_factory=RecordingClientFactory(FakeScoreClient()),
    )

    result = asyncio.run(scorer.score_day(profile.id, DAY))

    assert result.source == "local"
    assert logs.scores[DAY] == result.score
    assert scorer.build_adherence(profile, DAY).worked_out is True
    assert scorer.streak_days(profile.id, DAY) == 1
