"""Tests for the progress facade: mutation path, snapshots, observers."""

import threading
from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from progress_engine.achievements.catalog import CONSISTENCY_KING, FIRST_WORKOUT, WEEK_WARRIOR
from progress_engine.achievements.evaluator import AchievementFlags
from progress_engine.metrics.types import StreakState, TimeFrame, WeeklyStats
from progress_engine.progress.facade import ProgressFacade
from progress_engine.progress.types import ProgressSnapshot
from progress_engine.sessions.builder import AIPlanExercise, AIWorkoutDuration, AIWorkoutPlan
from progress_engine.sessions.models import CompletedExercise, MuscleGroup, WorkoutSession


class MutableClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now


class TestInitialState:
    def test_empty_snapshot(self, facade):
        current = facade.current()
        assert current.version == 0
        assert current.session_count == 0
        assert current.streak == StreakState()
        assert current.weekly_stats == WeeklyStats()
        assert current.achievements == AchievementFlags()
        assert facade.unlocks() == []

    def test_timezone_by_name(self):
        facade = ProgressFacade(tz="America/New_York")
        assert facade.timezone == ZoneInfo("America/New_York")


class TestLogSession:
    def test_first_workout(self, facade, make_session, now):
        snapshot = facade.log_session(make_session())

        assert snapshot.version == 1
        assert snapshot.session_count == 1
        assert snapshot.current_streak == 1
        assert snapshot.streak.status == "active"
        assert snapshot.achievements == AchievementFlags(has_first_workout=True)
        assert snapshot.computed_at == now
        assert facade.current() is snapshot
        assert facade.current_streak == 1

    def test_week_warrior(self, facade, make_session):
        for days_ago in (4, 3, 2, 1, 0):
            snapshot = facade.log_session(make_session(days_ago=days_ago))

        assert snapshot.weekly_stats.workouts_completed == 5
        assert snapshot.achievements.has_week_warrior is True
        assert snapshot.current_streak == 5
        assert [u.achievement_id for u in facade.unlocks()] == [FIRST_WORKOUT, WEEK_WARRIOR]

    def test_consistency_king(self, facade, make_session):
        for days_ago in range(29, -1, -1):
            snapshot = facade.log_session(make_session(days_ago=days_ago))

        assert snapshot.current_streak == 30
        assert snapshot.achievements.has_consistency_king is True
        assert CONSISTENCY_KING in {u.achievement_id for u in facade.unlocks()}

    def test_returned_snapshot_reflects_session(self, facade, make_session):
        snapshot = facade.log_session(make_session(duration_seconds=2700, calories_burned=300))
        assert snapshot.weekly_stats.total_time_minutes == 45
        assert snapshot.weekly_stats.calories_burned == 300

    def test_duplicate_is_ignored(self, facade, make_session):
        session = make_session()
        first = facade.log_session(session)
        second = facade.log_session(session)

        assert second is first
        assert facade.session_count() == 1
        assert facade.current().version == 1

    def test_sessions_in_insertion_order(self, facade, make_session):
        later = make_session(days_ago=0, title="later")
        earlier = make_session(days_ago=2, title="earlier")
        facade.log_session(later)
        facade.log_session(earlier)
        assert [s.title for s in facade.sessions()] == ["later", "earlier"]

    def test_concurrent_logging(self, facade, make_session):
        sessions = [make_session(days_ago=i % 20) for i in range(200)]
        chunks = [sessions[i::8] for i in range(8)]

        def worker(chunk):
            for session in chunk:
                facade.log_session(session)

        threads = [threading.Thread(target=worker, args=(chunk,)) for chunk in chunks]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        current = facade.current()
        assert facade.session_count() == 200
        assert current.version == 200
        assert current.session_count == 200
        assert current.current_streak == 20


class TestUnlocks:
    def test_unlock_recorded_once(self, make_session, utc):
        monday = datetime(2024, 3, 18, 20, 0, tzinfo=UTC)
        clock = MutableClock(monday)
        facade = ProgressFacade(tz=utc, clock=clock)

        for day in range(5):
            clock.now = monday + timedelta(days=day)
            facade.log_session(make_session(date=clock.now))
        first_unlock = {u.achievement_id: u.unlocked_at for u in facade.unlocks()}
        assert first_unlock[WEEK_WARRIOR] == monday + timedelta(days=4)

        # next week the flag drops, then flips back on
        next_monday = monday + timedelta(days=7)
        for day in range(5):
            clock.now = next_monday + timedelta(days=day)
            snapshot = facade.log_session(make_session(date=clock.now))
            if day == 0:
                assert snapshot.achievements.has_week_warrior is False
        assert snapshot.achievements.has_week_warrior is True

        unlocks = {u.achievement_id: u.unlocked_at for u in facade.unlocks()}
        assert unlocks[WEEK_WARRIOR] == first_unlock[WEEK_WARRIOR]
        assert unlocks[FIRST_WORKOUT] == monday


class TestLoadHistory:
    def test_single_recompute_and_notification(self, facade, make_session):
        received: list[ProgressSnapshot] = []
        facade.subscribe(received.append)

        snapshot = facade.load_history([make_session(days_ago=d) for d in range(30)])

        assert snapshot.version == 1
        assert snapshot.session_count == 30
        assert snapshot.current_streak == 30
        assert snapshot.achievements == AchievementFlags(True, True, True)
        assert received == [snapshot]

    def test_failing_source_leaves_log_and_snapshot_in_step(self, facade, make_session, now):
        received: list[ProgressSnapshot] = []
        facade.subscribe(received.append)

        def rows():
            yield make_session(days_ago=1)
            yield make_session(days_ago=0)
            yield WorkoutSession(title="bad row", date=now, duration_seconds=-1)

        with pytest.raises(ValidationError):
            facade.load_history(rows())

        assert facade.session_count() == facade.current().session_count == 0
        assert facade.current_streak == 0
        assert received == []

    def test_duplicates_skipped(self, facade, make_session):
        session = make_session()
        facade.log_session(session)
        received: list[ProgressSnapshot] = []
        facade.subscribe(received.append)

        snapshot = facade.load_history([session, session])

        assert snapshot.version == 1
        assert facade.session_count() == 1
        assert received == []


class TestConvenienceMutations:
    def test_complete_workout(self, facade, now):
        snapshot = facade.complete_workout(
            title="Push Day",
            duration_seconds=3000,
            exercises=[CompletedExercise(name="Bench Press", sets=4, reps=8, weight=80.0)],
            muscle_groups=[MuscleGroup.CHEST, MuscleGroup.TRICEPS],
        )
        (session,) = facade.sessions()
        assert session.title == "Push Day"
        assert session.date == now
        assert session.calories_burned == 400
        assert snapshot.weekly_stats.favorite_muscle_groups == (MuscleGroup.CHEST, MuscleGroup.TRICEPS)

    def test_log_ai_workout(self, facade):
        plan = AIWorkoutPlan(
            title="Leg Day",
            duration=AIWorkoutDuration.SHORT,
            exercises=[AIPlanExercise(name="Squat", sets=4, reps="8-10", rest="2 min")],
            muscle_groups=[MuscleGroup.QUADRICEPS],
        )
        snapshot = facade.log_ai_workout(plan, average_heart_rate=135)
        (session,) = facade.sessions()
        assert session.title == "AI: Leg Day"
        assert session.duration_seconds == 1800
        assert session.exercises[0].rest_seconds == 120
        assert snapshot.weekly_stats.average_heart_rate == 135

    def test_load_demo_data(self, facade):
        snapshot = facade.load_demo_data(seed=7)
        assert snapshot.session_count == 15
        assert snapshot.achievements.has_first_workout is True
        assert snapshot.streak.status == "inactive"


class TestSnapshot:
    def test_includes_metrics(self, facade, make_session):
        facade.log_session(make_session(days_ago=1))
        facade.log_session(make_session(days_ago=0))

        snapshot = facade.snapshot(TimeFrame.WEEK)

        assert snapshot.version == 2
        assert snapshot.metrics is not None
        assert snapshot.metrics.timeframe == TimeFrame.WEEK
        assert snapshot.metrics.workout_frequency == 3.5
        assert snapshot.streak == facade.current().streak
        assert facade.current().metrics is None

    def test_evaluated_against_current_time(self, make_session, utc):
        clock = MutableClock(datetime(2024, 3, 22, 18, 0, tzinfo=UTC))
        facade = ProgressFacade(tz=utc, clock=clock)
        facade.log_session(make_session(date=clock.now))

        clock.now += timedelta(days=3)
        assert facade.current().streak.status == "active"
        assert facade.snapshot().streak == StreakState(0, "inactive")


class TestObservers:
    def test_notified_with_each_snapshot(self, facade, make_session):
        received: list[ProgressSnapshot] = []
        facade.subscribe(received.append)

        first = facade.log_session(make_session(days_ago=1))
        second = facade.log_session(make_session(days_ago=0))

        assert received == [first, second]
        assert [s.version for s in received] == [1, 2]

    def test_unsubscribe(self, facade, make_session):
        received: list[ProgressSnapshot] = []
        unsubscribe = facade.subscribe(received.append)
        facade.log_session(make_session(days_ago=1))
        unsubscribe()
        unsubscribe()
        facade.log_session(make_session(days_ago=0))
        assert len(received) == 1

    def test_failing_observer_does_not_break_logging(self, facade, make_session):
        def broken(_snapshot):
            raise RuntimeError("sync failed")

        received: list[ProgressSnapshot] = []
        facade.subscribe(broken)
        facade.subscribe(received.append)

        snapshot = facade.log_session(make_session())

        assert snapshot.session_count == 1
        assert received == [snapshot]

    def test_duplicate_does_not_notify(self, facade, make_session):
        session = make_session()
        facade.log_session(session)
        received: list[ProgressSnapshot] = []
        facade.subscribe(received.append)
        facade.log_session(session)
        assert received == []


@pytest.mark.parametrize("tz_name", ["UTC", "Asia/Tokyo"])
def test_facade_timezone_attribution(make_session, tz_name):
    # a session at 16:00 UTC on the 22nd falls on the 23rd in Tokyo
    now = datetime(2024, 3, 23, 0, 30, tzinfo=UTC)
    facade = ProgressFacade(tz=tz_name, clock=lambda: now)
    facade.log_session(make_session(date=datetime(2024, 3, 22, 16, 0, tzinfo=UTC)))
    status = facade.current().streak.status
    assert status == ("at_risk" if tz_name == "UTC" else "active")
