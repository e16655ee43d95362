"""Client-side workout progress engine.

Session log, windowed metrics, streaks, achievements and an expiring cache
for expensive (AI-backed) results.
"""

from progress_engine.achievements.evaluator import AchievementFlags, evaluate_achievements
from progress_engine.cache.expiring import CacheEntry, ExpiringCache, TypedCacheView
from progress_engine.metrics.types import ProgressMetrics, StreakState, TimeFrame, WeeklyStats
from progress_engine.progress.facade import ProgressFacade
from progress_engine.progress.types import AchievementUnlock, ProgressSnapshot
from progress_engine.sessions.log import SessionLog
from progress_engine.sessions.models import CompletedExercise, MuscleGroup, WorkoutSession

__all__ = [
    "AchievementFlags",
    "AchievementUnlock",
    "CacheEntry",
    "CompletedExercise",
    "ExpiringCache",
    "MuscleGroup",
    "ProgressFacade",
    "ProgressMetrics",
    "ProgressSnapshot",
    "SessionLog",
    "StreakState",
    "TimeFrame",
    "TypedCacheView",
    "WeeklyStats",
    "WorkoutSession",
    "evaluate_achievements",
]
