"""Append-only session log.

The log is the single source of truth for every derived metric. Insertion
order is not chronological (sessions can be backfilled), so consumers that
window by date use `sorted_by_date()` or filter by date explicitly.

The log itself is not synchronized; `ProgressFacade` owns the lock that
serializes appends with recomputation.
"""

from collections.abc import Callable, Iterable, Iterator

from progress_engine.core.errors import DuplicateSessionError
from progress_engine.sessions.models import WorkoutSession


class SessionLog:
    def __init__(self, sessions: Iterable[WorkoutSession] = ()) -> None:
        self._sessions: list[WorkoutSession] = []
        self._ids: set[str] = set()
        for session in sessions:
            self.append(session)

    def append(self, session: WorkoutSession) -> None:
        """Append a session.

        Raises:
            DuplicateSessionError: If a session with the same id is already logged
        """
        if session.id in self._ids:
            raise DuplicateSessionError(session.id)
        self._sessions.append(session)
        self._ids.add(session.id)

    def contains(self, session_id: str) -> bool:
        return session_id in self._ids

    def all(self) -> tuple[WorkoutSession, ...]:
        """Read-only view in insertion order."""
        return tuple(self._sessions)

    def sorted_by_date(self) -> list[WorkoutSession]:
        return sorted(self._sessions, key=lambda s: s.date)

    def filter(self, predicate: Callable[[WorkoutSession], bool]) -> list[WorkoutSession]:
        return [s for s in self._sessions if predicate(s)]

    def count(self) -> int:
        return len(self._sessions)

    def copy(self) -> "SessionLog":
        clone = SessionLog()
        clone._sessions = list(self._sessions)
        clone._ids = set(self._ids)
        return clone

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[WorkoutSession]:
        return iter(tuple(self._sessions))

    def __bool__(self) -> bool:
        return bool(self._sessions)
