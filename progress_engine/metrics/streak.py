"""Consecutive-day streak tracking.

The streak is a walk over calendar days, not over sessions: starting from
today, count consecutive days that have at least one session. If today has
no session yet but yesterday does, the streak through yesterday is reported
with status "at_risk" rather than zeroed, since the day has not elapsed.

Recomputation always walks the full log. Partial updates drift; a full walk
is O(n) and n stays in the low thousands on a single device.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from zoneinfo import ZoneInfo

from loguru import logger

from progress_engine.metrics.types import StreakState
from progress_engine.sessions.models import WorkoutSession
from progress_engine.utils.calendar import previous_day
from progress_engine.utils.timezone import local_date, to_utc


def active_days(sessions: Iterable[WorkoutSession], now: datetime, tz: ZoneInfo) -> set[date]:
    """Local calendar days with at least one session, ignoring future-dated ones."""
    end = to_utc(now)
    return {local_date(s.date, tz) for s in sessions if s.date <= end}


def calculate_streak(sessions: Iterable[WorkoutSession], now: datetime, tz: ZoneInfo) -> StreakState:
    days = active_days(sessions, now, tz)
    today = local_date(now, tz)
    yesterday = previous_day(today)

    if today in days:
        cursor, status = today, "active"
    elif yesterday in days:
        cursor, status = yesterday, "at_risk"
    else:
        return StreakState(current_streak=0, status="inactive")

    streak = 0
    while cursor in days:
        streak += 1
        cursor = previous_day(cursor)

    return StreakState(current_streak=streak, status=status)


class StreakTracker:
    """Holds the last computed streak; the owner calls recompute() after every log mutation."""

    def __init__(self, tz: ZoneInfo) -> None:
        self._tz = tz
        self._state = StreakState()

    @property
    def state(self) -> StreakState:
        return self._state

    @property
    def current_streak(self) -> int:
        return self._state.current_streak

    def recompute(self, sessions: Iterable[WorkoutSession], now: datetime) -> StreakState:
        previous = self._state
        self._state = calculate_streak(sessions, now, self._tz)
        if self._state != previous:
            logger.debug(
                "[STREAK] Streak recomputed",
                previous=previous.current_streak,
                current=self._state.current_streak,
                status=self._state.status,
            )
        return self._state
