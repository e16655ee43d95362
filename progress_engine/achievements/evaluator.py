"""Rule-based achievement evaluation.

Flags are pure functions of the session log and the streak state. The
evaluator keeps no history; unlock timestamps are recorded by the facade.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from progress_engine.achievements.catalog import (
    CONSISTENCY_KING,
    CONSISTENCY_KING_STREAK,
    FIRST_WORKOUT,
    WEEK_WARRIOR,
    WEEK_WARRIOR_SESSIONS,
)
from progress_engine.metrics.types import StreakState, TimeFrame
from progress_engine.metrics.window import sessions_in_window
from progress_engine.sessions.models import WorkoutSession


@dataclass(frozen=True)
class AchievementFlags:
    has_first_workout: bool = False
    has_week_warrior: bool = False
    has_consistency_king: bool = False

    def as_dict(self) -> dict[str, bool]:
        return {
            FIRST_WORKOUT: self.has_first_workout,
            WEEK_WARRIOR: self.has_week_warrior,
            CONSISTENCY_KING: self.has_consistency_king,
        }

    def newly_unlocked(self, previous: AchievementFlags) -> list[str]:
        """Achievement ids that are set here but were not set in `previous`."""
        before = previous.as_dict()
        return [key for key, value in self.as_dict().items() if value and not before[key]]


def evaluate_achievements(
    sessions: Iterable[WorkoutSession],
    streak: StreakState,
    now: datetime,
    tz: ZoneInfo | None = None,
) -> AchievementFlags:
    """Evaluate every achievement rule.

    Rules:
        - first workout: at least one session logged
        - week warrior: >= 5 sessions since the start of the current week
        - consistency king: current streak >= 30 days
    """
    snapshot = tuple(sessions)
    this_week = sessions_in_window(snapshot, TimeFrame.WEEK, now, tz)
    return AchievementFlags(
        has_first_workout=len(snapshot) > 0,
        has_week_warrior=len(this_week) >= WEEK_WARRIOR_SESSIONS,
        has_consistency_king=streak.current_streak >= CONSISTENCY_KING_STREAK,
    )
