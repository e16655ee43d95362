"""Derived progress data contracts (single source of truth)."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Literal

from progress_engine.sessions.models import MuscleGroup

StreakStatus = Literal["active", "at_risk", "inactive"]


class TimeFrame(StrEnum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True)
class StreakState:
    """Consecutive-day streak derived from the session log.

    Attributes:
        current_streak: Consecutive days with at least one session, ending today or yesterday
        status: active (session today), at_risk (streak runs through yesterday), inactive (no streak)
    """

    current_streak: int = 0
    status: StreakStatus = "inactive"


@dataclass(frozen=True)
class WeeklyStats:
    """Snapshot of the current ISO week."""

    workouts_completed: int = 0
    total_time_minutes: int = 0
    average_duration: int = 0
    favorite_muscle_groups: tuple[MuscleGroup, ...] = field(default_factory=tuple)
    calories_burned: int = 0
    average_heart_rate: int = 0


@dataclass(frozen=True)
class ProgressMetrics:
    """All window aggregates for one timeframe."""

    timeframe: TimeFrame
    workout_frequency: float = 0.0
    consistency_score: float = 0.0
    strength_progress: float = 0.0
    total_workout_time_seconds: int = 0
    total_calories_burned: int = 0
    average_heart_rate: int = 0
