"""Weekly stats snapshot for the current ISO week."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from datetime import datetime
from zoneinfo import ZoneInfo

from progress_engine.metrics.types import TimeFrame, WeeklyStats
from progress_engine.metrics.window import sessions_in_window
from progress_engine.sessions.models import MuscleGroup, WorkoutSession

FAVORITE_MUSCLE_GROUP_LIMIT = 3


def favorite_muscle_groups(
    sessions: Iterable[WorkoutSession],
    limit: int = FAVORITE_MUSCLE_GROUP_LIMIT,
) -> tuple[MuscleGroup, ...]:
    """Most frequently trained muscle groups, most common first.

    Ties keep the order in which groups first appear, so pass sessions
    sorted by date for a stable ranking.
    """
    counts: Counter[MuscleGroup] = Counter()
    for session in sessions:
        counts.update(session.muscle_groups)
    return tuple(group for group, _ in counts.most_common(limit))


def compute_weekly_stats(
    sessions: Iterable[WorkoutSession],
    now: datetime,
    tz: ZoneInfo | None = None,
) -> WeeklyStats:
    """Recompute the current week's stats from scratch.

    Returns:
        WeeklyStats; all zeros when the week has no sessions
    """
    week = sessions_in_window(sessions, TimeFrame.WEEK, now, tz)
    if not week:
        return WeeklyStats()

    total_seconds = sum(s.duration_seconds for s in week)
    heart_rates = [s.average_heart_rate for s in week if s.average_heart_rate is not None]

    return WeeklyStats(
        workouts_completed=len(week),
        total_time_minutes=total_seconds // 60,
        average_duration=round(total_seconds / 60 / len(week)),
        favorite_muscle_groups=favorite_muscle_groups(week),
        calories_burned=sum(s.calories_burned for s in week),
        average_heart_rate=int(sum(heart_rates) / len(heart_rates)) if heart_rates else 0,
    )
