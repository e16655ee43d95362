"""Root conftest for all tests.

Shared fixtures: a fixed reference "now", a controllable clock for the
cache, and a session factory dating sessions relative to "now".
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from progress_engine.progress.facade import ProgressFacade
from progress_engine.sessions.models import CompletedExercise, MuscleGroup, WorkoutSession

# Friday 2024-03-22 18:00 UTC: week starts Mon 2024-03-18, month 2024-03-01
REFERENCE_NOW = datetime(2024, 3, 22, 18, 0, tzinfo=UTC)


class FakeClock:
    """Monotonic seconds clock advanced manually."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def now() -> datetime:
    return REFERENCE_NOW


@pytest.fixture
def utc() -> ZoneInfo:
    return ZoneInfo("UTC")


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_session(now: datetime) -> Callable[..., WorkoutSession]:
    """Factory for sessions dated `days_ago` days before the reference now."""

    def _make(
        days_ago: float = 0,
        duration_seconds: int = 1800,
        weight: float | None = None,
        muscle_groups: tuple[MuscleGroup, ...] = (MuscleGroup.CHEST,),
        calories_burned: int = 240,
        average_heart_rate: int | None = 140,
        **kwargs,
    ) -> WorkoutSession:
        exercises = kwargs.pop("exercises", None)
        if exercises is None:
            exercises = (CompletedExercise(name="Bench Press", sets=3, reps=10, weight=weight),)
        return WorkoutSession(
            title=kwargs.pop("title", "Session"),
            date=kwargs.pop("date", now - timedelta(days=days_ago)),
            duration_seconds=duration_seconds,
            exercises=exercises,
            muscle_groups=muscle_groups,
            calories_burned=calories_burned,
            average_heart_rate=average_heart_rate,
            **kwargs,
        )

    return _make


@pytest.fixture
def facade(now: datetime, utc: ZoneInfo) -> ProgressFacade:
    return ProgressFacade(tz=utc, clock=lambda: now)
