"""Weekly workout split helpers."""

from dataclasses import dataclass
from datetime import date

REST_DAY = "Rest Day"
WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


@dataclass(frozen=True)
class SplitPreset:
    """Named weekly split layout."""

    name: str
    layout: dict[str, list[str]]


_PUSH = ["Chest", "Shoulders", "Triceps"]
_PULL = ["Back", "Biceps", "Forearms"]
_LEGS = ["Quads", "Hamstrings", "Glutes", "Calves"]
_UPPER = ["Chest", "Back", "Shoulders", "Biceps", "Triceps"]

SPLIT_PRESETS: tuple[SplitPreset, ...] = (
    SplitPreset(
        name="Push/Pull/Legs (2x)",
        layout={
            "monday": _PUSH,
            "tuesday": _PULL,
            "wednesday": _LEGS,
            "thursday": _PUSH,
            "friday": _PULL,
            "saturday": _LEGS,
            "sunday": [REST_DAY],
        },
    ),
    SplitPreset(
        name="Push/Pull/Legs (1x)",
        layout={
            "monday": _PUSH,
            "tuesday": _PULL,
            "wednesday": _LEGS,
            "thursday": [REST_DAY],
            "friday": [REST_DAY],
            "saturday": [REST_DAY],
            "sunday": [REST_DAY],
        },
    ),
    SplitPreset(
        name="Bro Split",
        layout={
            "monday": ["Chest"],
            "tuesday": ["Back"],
            "wednesday": ["Shoulders"],
            "thursday": ["Biceps", "Triceps"],
            "friday": _LEGS,
            "saturday": [REST_DAY],
            "sunday": [REST_DAY],
        },
    ),
    SplitPreset(
        name="Upper/Lower (2x)",
        layout={
            "monday": _UPPER,
            "tuesday": _LEGS,
            "wednesday": [REST_DAY],
            "thursday": _UPPER,
            "friday": _LEGS,
            "saturday": [REST_DAY],
            "sunday": [REST_DAY],
        },
    ),
    SplitPreset(
        name="Arnold Split",
        layout={
            "monday": ["Chest", "Back"],
            "tuesday": ["Shoulders", "Biceps", "Triceps"],
            "wednesday": _LEGS,
            "thursday": ["Chest", "Back"],
            "friday": ["Shoulders", "Biceps", "Triceps"],
            "saturday": _LEGS,
            "sunday": [REST_DAY],
        },
    ),
    SplitPreset(
        name="Full Body (3x)",
        layout={
            "monday": ["Full Body"],
            "tuesday": [REST_DAY],
            "wednesday": ["Full Body"],
            "thursday": [REST_DAY],
            "friday": ["Full Body"],
            "saturday": [REST_DAY],
            "sunday": [REST_DAY],
        },
    ),
    SplitPreset(
        name="Hybrid Athlete",
        layout={
            "monday": _UPPER,
            "tuesday": _LEGS,
            "wednesday": ["Cardio"],
            "thursday": _UPPER,
            "friday": _LEGS,
            "saturday": ["Cardio"],
            "sunday": [REST_DAY],
        },
    ),
)


def empty_split() -> dict[str, list[str]]:
    """Return a split with no body parts assigned."""
    return {name: [] for name in WEEKDAYS}


def day_name(day: date) -> str:
    """Return the split key for a calendar day (Monday first)."""
    return WEEKDAYS[day.weekday()]


def parts_for_day(split: dict[str, list[str]], day: date) -> list[str]:
    """Return the body parts scheduled for a day."""
    return list(split.get(day_name(day), []))


def is_rest_day(split: dict[str, list[str]], day: date) -> bool:
    """Return True when nothing is scheduled or the day is marked as rest."""
    parts = parts_for_day(split, day)
    return not parts or REST_DAY in parts


def format_split_day(parts: list[str]) -> str:
    """Return a display label for a day's body parts."""
    if not parts or REST_DAY in parts:
        return REST_DAY
    return " + ".join(parts)
