"""Snapshot contracts published by the progress facade."""

from dataclasses import dataclass
from datetime import datetime

from progress_engine.achievements.evaluator import AchievementFlags
from progress_engine.metrics.types import ProgressMetrics, StreakState, WeeklyStats


@dataclass(frozen=True)
class AchievementUnlock:
    """First time an achievement flag flipped from False to True."""

    achievement_id: str
    unlocked_at: datetime


@dataclass(frozen=True)
class ProgressSnapshot:
    """Self-consistent view of derived progress state.

    Attributes:
        version: Number of successful mutations when this snapshot was computed;
            observers can drop a snapshot older than one they already saw
        session_count: Sessions in the log
        streak: Current streak and status
        weekly_stats: Current ISO week stats
        achievements: Achievement flags
        computed_at: The "now" the snapshot was computed against
        metrics: Window aggregates, present on snapshots built by `ProgressFacade.snapshot`
    """

    version: int
    session_count: int
    streak: StreakState
    weekly_stats: WeeklyStats
    achievements: AchievementFlags
    computed_at: datetime
    metrics: ProgressMetrics | None = None

    @property
    def current_streak(self) -> int:
        return self.streak.current_streak
