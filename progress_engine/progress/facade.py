"""Progress facade: the single mutation path for workout progress.

Flow per mutation:
    append to SessionLog -> recompute streak -> recompute weekly stats
    -> evaluate achievements -> publish snapshot to observers

A single lock serializes the append with its recompute, so readers never
see a log that has an append the streak has not observed. Recompute is
synchronous: when `log_session` returns, the returned snapshot already
reflects the new session.

The facade performs no I/O. Pushing the session and snapshot to a remote
store is the caller's job (typically from an observer).
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from datetime import datetime
from zoneinfo import ZoneInfo

from loguru import logger

from progress_engine.achievements.evaluator import AchievementFlags, evaluate_achievements
from progress_engine.config.settings import settings
from progress_engine.core.errors import DuplicateSessionError
from progress_engine.metrics.streak import StreakTracker, calculate_streak
from progress_engine.metrics.types import TimeFrame
from progress_engine.metrics.weekly_stats import compute_weekly_stats
from progress_engine.metrics.window import compute_progress_metrics
from progress_engine.progress.types import AchievementUnlock, ProgressSnapshot
from progress_engine.sessions.builder import AIWorkoutPlan, complete_workout, session_from_ai_plan
from progress_engine.sessions.demo import generate_demo_sessions
from progress_engine.sessions.log import SessionLog
from progress_engine.sessions.models import CompletedExercise, MuscleGroup, WorkoutSession
from progress_engine.utils.timezone import Clock, get_timezone, utc_now

SnapshotObserver = Callable[[ProgressSnapshot], None]


class ProgressFacade:
    """Owns the session log and every piece of state derived from it.

    Construct one per user session and pass it to consumers explicitly.

    Args:
        tz: Timezone (ZoneInfo or IANA name) for day boundaries
            (default: PROGRESS_TIMEZONE)
        clock: Returns the current aware datetime (default: UTC wall clock)
    """

    def __init__(self, tz: ZoneInfo | str | None = None, clock: Clock | None = None) -> None:
        if isinstance(tz, ZoneInfo):
            self._tz = tz
        else:
            self._tz = get_timezone(tz or settings.timezone)
        self._clock: Clock = clock or utc_now
        self._log = SessionLog()
        self._streak = StreakTracker(self._tz)
        self._flags = AchievementFlags()
        self._unlocks: dict[str, AchievementUnlock] = {}
        self._version = 0
        self._lock = threading.Lock()
        self._observers: list[SnapshotObserver] = []
        self._observers_lock = threading.Lock()
        with self._lock:
            self._latest = self._recompute_locked(self._clock())

    @property
    def timezone(self) -> ZoneInfo:
        return self._tz

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def log_session(self, session: WorkoutSession) -> ProgressSnapshot:
        """Append a session and return the recomputed snapshot.

        A session whose id is already logged is ignored; the current snapshot
        is returned unchanged.
        """
        with self._lock:
            try:
                self._log.append(session)
            except DuplicateSessionError:
                logger.warning("[PROGRESS] Duplicate session ignored", session_id=session.id)
                return self._latest
            self._version += 1
            snapshot = self._recompute_locked(self._clock())

        logger.info(
            "[PROGRESS] Session logged",
            session_id=session.id,
            title=session.title,
            streak=snapshot.current_streak,
            workouts_this_week=snapshot.weekly_stats.workouts_completed,
        )
        self._notify(snapshot)
        return snapshot

    def load_history(self, sessions: Iterable[WorkoutSession]) -> ProgressSnapshot:
        """Append many sessions (e.g. history fetched at start-up) with one recompute.

        Sessions already logged are skipped. The input is fully materialized
        before the lock is taken, so an iterable that raises partway leaves
        the log untouched.
        """
        batch = list(sessions)
        added = 0
        skipped = 0
        with self._lock:
            for session in batch:
                try:
                    self._log.append(session)
                except DuplicateSessionError:
                    skipped += 1
                    continue
                added += 1
            if added == 0:
                snapshot = self._latest
            else:
                self._version += 1
                snapshot = self._recompute_locked(self._clock())

        logger.info("[PROGRESS] History loaded", added=added, skipped=skipped)
        if added:
            self._notify(snapshot)
        return snapshot

    def complete_workout(
        self,
        title: str,
        duration_seconds: int,
        exercises: Iterable[CompletedExercise],
        muscle_groups: Iterable[MuscleGroup],
        average_heart_rate: int | None = None,
        calories_burned: int | None = None,
    ) -> ProgressSnapshot:
        """Log a manually completed workout dated now."""
        session = complete_workout(
            title=title,
            duration_seconds=duration_seconds,
            exercises=exercises,
            muscle_groups=muscle_groups,
            now=self._clock(),
            average_heart_rate=average_heart_rate,
            calories_burned=calories_burned,
        )
        return self.log_session(session)

    def log_ai_workout(self, plan: AIWorkoutPlan, average_heart_rate: int | None = None) -> ProgressSnapshot:
        """Log completion of an AI-generated workout plan dated now."""
        return self.log_session(session_from_ai_plan(plan, self._clock(), average_heart_rate))

    def load_demo_data(self, seed: int | None = None) -> ProgressSnapshot:
        return self.load_history(generate_demo_sessions(self._clock(), seed=seed))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def current(self) -> ProgressSnapshot:
        """Snapshot published by the last mutation (no recompute)."""
        with self._lock:
            return self._latest

    def snapshot(self, timeframe: TimeFrame = TimeFrame.WEEK) -> ProgressSnapshot:
        """Recompute every derived value against the current time.

        Not cached; wrap with an ExpiringCache at the call site if repeated
        reads are expensive for the log size.
        """
        with self._lock:
            sessions = self._log.all()
            version = self._version
        now = self._clock()

        streak = calculate_streak(sessions, now, self._tz)
        return ProgressSnapshot(
            version=version,
            session_count=len(sessions),
            streak=streak,
            weekly_stats=compute_weekly_stats(sessions, now, self._tz),
            achievements=evaluate_achievements(sessions, streak, now, self._tz),
            computed_at=now,
            metrics=compute_progress_metrics(sessions, timeframe, now, self._tz),
        )

    def sessions(self) -> tuple[WorkoutSession, ...]:
        with self._lock:
            return self._log.all()

    def session_count(self) -> int:
        with self._lock:
            return self._log.count()

    @property
    def current_streak(self) -> int:
        with self._lock:
            return self._streak.current_streak

    def unlocks(self) -> list[AchievementUnlock]:
        """Achievement unlocks in the order they happened."""
        with self._lock:
            return sorted(self._unlocks.values(), key=lambda u: u.unlocked_at)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, observer: SnapshotObserver) -> Callable[[], None]:
        """Register a callback invoked with each new snapshot.

        Callbacks run on the mutating thread after the lock is released.
        Delivery order across concurrent writers is not guaranteed; compare
        `ProgressSnapshot.version` to discard stale snapshots.

        Returns:
            A function that removes the observer
        """
        with self._observers_lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._observers_lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def _notify(self, snapshot: ProgressSnapshot) -> None:
        with self._observers_lock:
            observers = list(self._observers)
        for observer in observers:
            try:
                observer(snapshot)
            except Exception:
                logger.exception("[PROGRESS] Snapshot observer failed", version=snapshot.version)

    # ------------------------------------------------------------------
    # Internals (caller holds self._lock)
    # ------------------------------------------------------------------

    def _recompute_locked(self, now: datetime) -> ProgressSnapshot:
        sessions = self._log.all()
        streak = self._streak.recompute(sessions, now)
        weekly_stats = compute_weekly_stats(sessions, now, self._tz)
        flags = evaluate_achievements(sessions, streak, now, self._tz)

        for achievement_id in flags.newly_unlocked(self._flags):
            if achievement_id in self._unlocks:
                continue
            self._unlocks[achievement_id] = AchievementUnlock(achievement_id=achievement_id, unlocked_at=now)
            logger.info("[ACHIEVEMENT] Unlocked", achievement_id=achievement_id)
        self._flags = flags

        self._latest = ProgressSnapshot(
            version=self._version,
            session_count=len(sessions),
            streak=streak,
            weekly_stats=weekly_stats,
            achievements=flags,
            computed_at=now,
        )
        return self._latest
