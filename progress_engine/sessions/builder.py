"""Session construction helpers.

Maps finished workouts (manual or AI-generated plans) into WorkoutSession
values. Calories are estimated from duration when the caller has no
measured figure; heart rate stays unknown unless supplied.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from progress_engine.config.settings import settings
from progress_engine.sessions.models import CompletedExercise, MuscleGroup, WorkoutSession

DEFAULT_REST_SECONDS = 90
DEFAULT_REPS = 10

_FIRST_INT = re.compile(r"\d+")


class AIWorkoutDuration(StrEnum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"

    @property
    def minutes(self) -> int:
        return {"short": 30, "medium": 45, "long": 60}[self.value]


class AIPlanExercise(BaseModel):
    name: str
    sets: int = Field(default=3, ge=0)
    reps: str = Field(default="", description="Free text, e.g. '8-12' or '10 each side'")
    rest: str = Field(default="", description="Free text, e.g. '90 sec' or '2 min'")
    notes: str = ""


class AIWorkoutPlan(BaseModel):
    title: str
    duration: AIWorkoutDuration = AIWorkoutDuration.MEDIUM
    exercises: list[AIPlanExercise] = Field(default_factory=list)
    muscle_groups: list[MuscleGroup] = Field(default_factory=list)


def estimate_calories(duration_seconds: float, calories_per_minute: float | None = None) -> int:
    """Estimate calories burned from duration alone.

    Args:
        duration_seconds: Workout duration in seconds
        calories_per_minute: Burn rate (defaults to PROGRESS_CALORIES_PER_MINUTE, 8.0
            which is an average for strength training)

    Returns:
        Whole calories, truncated
    """
    rate = settings.calories_per_minute if calories_per_minute is None else calories_per_minute
    minutes = max(duration_seconds, 0) / 60.0
    return int(minutes * rate)


def parse_first_int(text: str) -> int | None:
    match = _FIRST_INT.search(text or "")
    return int(match.group()) if match else None


def parse_rest_seconds(text: str) -> int:
    """Parse a rest period like "2 min" or "45 seconds"; defaults to 90 seconds."""
    lower = (text or "").lower()
    n = parse_first_int(lower)
    if n is not None:
        if "min" in lower:
            return n * 60
        if "sec" in lower:
            return n
    return DEFAULT_REST_SECONDS


def session_from_ai_plan(
    plan: AIWorkoutPlan,
    now: datetime,
    average_heart_rate: int | None = None,
) -> WorkoutSession:
    """Build the session recorded when the user finishes an AI-generated plan."""
    exercises = tuple(
        CompletedExercise(
            name=ex.name,
            sets=ex.sets,
            reps=parse_first_int(ex.reps) or DEFAULT_REPS,
            weight=None,
            rest_seconds=parse_rest_seconds(ex.rest),
            completed=False,
            notes=ex.notes or None,
        )
        for ex in plan.exercises
    )
    duration_seconds = plan.duration.minutes * 60
    return WorkoutSession(
        title=f"AI: {plan.title}",
        date=now,
        duration_seconds=duration_seconds,
        exercises=exercises,
        muscle_groups=tuple(plan.muscle_groups),
        calories_burned=estimate_calories(duration_seconds),
        average_heart_rate=average_heart_rate,
    )


def complete_workout(
    title: str,
    duration_seconds: int,
    exercises: Iterable[CompletedExercise],
    muscle_groups: Iterable[MuscleGroup],
    now: datetime,
    average_heart_rate: int | None = None,
    calories_burned: int | None = None,
) -> WorkoutSession:
    """Build a session for a manually completed workout dated `now`."""
    return WorkoutSession(
        title=title,
        date=now,
        duration_seconds=duration_seconds,
        exercises=tuple(exercises),
        muscle_groups=tuple(muscle_groups),
        calories_burned=estimate_calories(duration_seconds) if calories_burned is None else calories_burned,
        average_heart_rate=average_heart_rate,
    )
