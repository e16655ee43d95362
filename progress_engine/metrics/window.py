"""Window aggregates over the session log.

Pure, stateless functions of (sessions, timeframe, now). Every window starts
at local midnight of its first day in the configured timezone:

- week: Monday of the current ISO week
- month: the first of the current month
- year: January 1 of the current year

A session belongs to a window when window_start <= session.date <= now.
Future-dated sessions are ignored. The same calendar rules back the
streak tracker, so "streak active" and "weekly count" never disagree about
which day a session fell on.

Empty input never raises: every aggregate has a neutral value (0 / 0.0).
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from progress_engine.config.settings import settings
from progress_engine.metrics.types import ProgressMetrics, TimeFrame
from progress_engine.sessions.models import WorkoutSession
from progress_engine.utils.calendar import month_start, subtract_months, subtract_years, week_start, year_start
from progress_engine.utils.timezone import get_timezone, local_date, local_midnight, to_utc

STRENGTH_CHANGE_LIMIT = 0.5


def _resolve_tz(tz: ZoneInfo | None) -> ZoneInfo:
    return tz if tz is not None else get_timezone(settings.timezone)


def window_start(timeframe: TimeFrame, now: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Return the start of the window containing `now` as an aware datetime."""
    zone = _resolve_tz(tz)
    today = local_date(now, zone)
    if timeframe == TimeFrame.WEEK:
        first_day = week_start(today)
    elif timeframe == TimeFrame.MONTH:
        first_day = month_start(today)
    else:
        first_day = year_start(today)
    return local_midnight(first_day, zone)


def days_elapsed(timeframe: TimeFrame, now: datetime, tz: ZoneInfo | None = None) -> int:
    """Whole days elapsed since the window start (0 on the window's first day)."""
    zone = _resolve_tz(tz)
    start = window_start(timeframe, now, zone)
    return (local_date(now, zone) - start.date()).days


def sessions_in_window(
    sessions: Iterable[WorkoutSession],
    timeframe: TimeFrame,
    now: datetime,
    tz: ZoneInfo | None = None,
) -> list[WorkoutSession]:
    """Sessions inside the window, sorted by date."""
    start = window_start(timeframe, now, tz)
    end = to_utc(now)
    return sorted((s for s in sessions if start <= s.date <= end), key=lambda s: s.date)


def expected_sessions(timeframe: TimeFrame) -> int:
    if timeframe == TimeFrame.WEEK:
        return settings.expected_sessions_week
    if timeframe == TimeFrame.MONTH:
        return settings.expected_sessions_month
    return settings.expected_sessions_year


def frequency(
    sessions: Iterable[WorkoutSession],
    timeframe: TimeFrame,
    now: datetime,
    tz: ZoneInfo | None = None,
) -> float:
    """Sessions per week over the elapsed part of the window.

    Normalized to a weekly rate whatever the timeframe: 12 sessions in 20
    elapsed days of a month reports 4.2. Returns 0.0 on the first day of a
    window (no whole day elapsed yet).
    """
    elapsed = days_elapsed(timeframe, now, tz)
    if elapsed <= 0:
        return 0.0
    count = len(sessions_in_window(sessions, timeframe, now, tz))
    return count / elapsed * 7


def consistency_score(
    sessions: Iterable[WorkoutSession],
    timeframe: TimeFrame,
    now: datetime,
    tz: ZoneInfo | None = None,
    expected: int | None = None,
) -> float:
    """Ratio of actual to expected sessions, capped at 1.0.

    `expected` defaults to the per-timeframe target (4/week, 16/month,
    200/year). The target does not scale with elapsed days, so a window that
    has just started reads low.
    """
    target = expected if expected is not None else expected_sessions(timeframe)
    if target <= 0:
        return 0.0
    actual = len(sessions_in_window(sessions, timeframe, now, tz))
    return min(actual / target, 1.0)


def strength_lookback_start(timeframe: TimeFrame, now: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Boundary between the recent and older halves for strength progress.

    week -> 2 weeks before now, month -> 2 months, year -> 1 year.
    """
    if timeframe == TimeFrame.WEEK:
        return to_utc(now) - timedelta(weeks=2)
    today = local_date(now, _resolve_tz(tz))
    if timeframe == TimeFrame.MONTH:
        target = subtract_months(today, 2)
    else:
        target = subtract_years(today, 1)
    return to_utc(now) - timedelta(days=(today - target).days)


def _average(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def strength_progress(
    sessions: Iterable[WorkoutSession],
    timeframe: TimeFrame,
    now: datetime,
    tz: ZoneInfo | None = None,
) -> float:
    """Fractional change in average logged weight, recent half vs older half.

    Returns 0.0 when either half has no weighted exercises. The result is
    clamped to [-0.5, 0.5].
    """
    cutoff = strength_lookback_start(timeframe, now, tz)
    end = to_utc(now)
    recent_weights: list[float] = []
    older_weights: list[float] = []
    for session in sessions:
        if session.date > end:
            continue
        if session.date >= cutoff:
            recent_weights.extend(session.weights())
        else:
            older_weights.extend(session.weights())

    if not recent_weights or not older_weights:
        return 0.0

    older_avg = _average(older_weights)
    if older_avg <= 0:
        return 0.0
    change = (_average(recent_weights) - older_avg) / older_avg
    return max(-STRENGTH_CHANGE_LIMIT, min(STRENGTH_CHANGE_LIMIT, change))


def total_time(
    sessions: Iterable[WorkoutSession],
    timeframe: TimeFrame,
    now: datetime,
    tz: ZoneInfo | None = None,
) -> int:
    """Total workout time in seconds."""
    return sum(s.duration_seconds for s in sessions_in_window(sessions, timeframe, now, tz))


def total_calories(
    sessions: Iterable[WorkoutSession],
    timeframe: TimeFrame,
    now: datetime,
    tz: ZoneInfo | None = None,
) -> int:
    return sum(s.calories_burned for s in sessions_in_window(sessions, timeframe, now, tz))


def average_heart_rate(
    sessions: Iterable[WorkoutSession],
    timeframe: TimeFrame,
    now: datetime,
    tz: ZoneInfo | None = None,
) -> int:
    """Mean heart rate over sessions with a known value; 0 if none is known."""
    rates = [
        s.average_heart_rate
        for s in sessions_in_window(sessions, timeframe, now, tz)
        if s.average_heart_rate is not None
    ]
    if not rates:
        return 0
    return int(sum(rates) / len(rates))


def compute_progress_metrics(
    sessions: Iterable[WorkoutSession],
    timeframe: TimeFrame,
    now: datetime,
    tz: ZoneInfo | None = None,
) -> ProgressMetrics:
    """Compute every window aggregate for one timeframe."""
    zone = _resolve_tz(tz)
    snapshot = tuple(sessions)
    return ProgressMetrics(
        timeframe=timeframe,
        workout_frequency=round(frequency(snapshot, timeframe, now, zone), 2),
        consistency_score=consistency_score(snapshot, timeframe, now, zone),
        strength_progress=strength_progress(snapshot, timeframe, now, zone),
        total_workout_time_seconds=total_time(snapshot, timeframe, now, zone),
        total_calories_burned=total_calories(snapshot, timeframe, now, zone),
        average_heart_rate=average_heart_rate(snapshot, timeframe, now, zone),
    )
