"""Demo workout history for previews and manual testing."""

from __future__ import annotations

import random
import uuid
from datetime import datetime, timedelta

from progress_engine.sessions.models import CompletedExercise, MuscleGroup, WorkoutSession

DEMO_TITLES = ("Push Day", "Pull Day", "Leg Day", "Cardio")
DEMO_EXERCISES = ("Bench Press", "Squats", "Deadlifts", "Pull-ups", "Overhead Press", "Rows")


def _demo_exercises(rng: random.Random) -> tuple[CompletedExercise, ...]:
    return tuple(
        CompletedExercise(
            name=name,
            sets=rng.randint(3, 4),
            reps=rng.randint(8, 12),
            weight=round(rng.uniform(50, 150), 1),
            rest_seconds=90,
            completed=True,
        )
        for name in DEMO_EXERCISES[:3]
    )


def generate_demo_sessions(now: datetime, days: int = 30, seed: int | None = None) -> list[WorkoutSession]:
    """Generate one session every other day over the past `days` days.

    Sessions are dated 2, 4, ... days before `now`, so today and yesterday
    are always empty. Pass `seed` for a reproducible history.
    """
    rng = random.Random(seed)
    muscle_groups = list(MuscleGroup)
    sessions: list[WorkoutSession] = []
    for days_back in range(2, days + 1, 2):
        sessions.append(
            WorkoutSession(
                id=str(uuid.UUID(int=rng.getrandbits(128), version=4)),
                title=rng.choice(DEMO_TITLES),
                date=now - timedelta(days=days_back),
                duration_seconds=rng.randint(1800, 3600),
                exercises=_demo_exercises(rng),
                muscle_groups=(rng.choice(muscle_groups),),
                calories_burned=rng.randint(200, 500),
                average_heart_rate=rng.randint(130, 160),
            )
        )
    return sessions
