"""Workout session value types.

A WorkoutSession is created once (by the UI or by a sync adapter), handed to
the facade, and never mutated afterwards. Validation happens here at
construction time; the engine assumes every session it receives is valid.
"""

from datetime import datetime
from enum import StrEnum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from progress_engine.utils.timezone import to_utc


class MuscleGroup(StrEnum):
    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    FOREARMS = "forearms"
    ABS = "abs"
    OBLIQUES = "obliques"
    LOWER_BACK = "lower_back"
    GLUTES = "glutes"
    QUADRICEPS = "quadriceps"
    HAMSTRINGS = "hamstrings"
    CALVES = "calves"
    FULL_BODY = "full_body"
    CARDIO = "cardio"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


class CompletedExercise(BaseModel):
    """One exercise performed within a session. Opaque to the aggregator except for weight."""

    model_config = ConfigDict(frozen=True)

    name: str
    sets: int = Field(default=0, ge=0)
    reps: int = Field(default=0, ge=0)
    weight: float | None = Field(default=None, description="Load in the user's unit (kg or lbs)")
    rest_seconds: float = Field(default=0.0, ge=0)
    completed: bool = True
    notes: str | None = None


class WorkoutSession(BaseModel):
    """One completed workout."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str
    date: datetime = Field(..., description="When the workout happened (not when it was logged)")
    duration_seconds: int = Field(..., ge=0)
    exercises: tuple[CompletedExercise, ...] = ()
    muscle_groups: tuple[MuscleGroup, ...] = ()
    calories_burned: int = Field(default=0, ge=0)
    average_heart_rate: int | None = Field(default=None, description="None or 0 means unknown")
    notes: str | None = None

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: datetime) -> datetime:
        return to_utc(value)

    @field_validator("muscle_groups")
    @classmethod
    def dedupe_muscle_groups(cls, value: tuple[MuscleGroup, ...]) -> tuple[MuscleGroup, ...]:
        # Set semantics, first-seen order kept for stable ranking
        return tuple(dict.fromkeys(value))

    @field_validator("average_heart_rate")
    @classmethod
    def validate_heart_rate(cls, value: int | None) -> int | None:
        if value is None or value == 0:
            return None
        if value < 0:
            raise ValueError(f"average_heart_rate must be positive, got {value}")
        return value

    @property
    def duration_minutes(self) -> float:
        return self.duration_seconds / 60.0

    @property
    def has_heart_rate(self) -> bool:
        return self.average_heart_rate is not None

    def weights(self) -> list[float]:
        """Logged weights across all exercises, ignoring unknown or zero loads."""
        return [ex.weight for ex in self.exercises if ex.weight is not None and ex.weight > 0]
