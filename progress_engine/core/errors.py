"""Error types for the progress engine.

Only programming errors and duplicate ids surface as exceptions. Cache
misses, stale or corrupt entries, and empty windows are expected
conditions and never raise.
"""


class ProgressEngineError(RuntimeError):
    """Base class for progress engine errors."""


class DuplicateSessionError(ProgressEngineError):
    """Raised when a session id is already present in the log."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Workout session already logged: {session_id}")
        self.session_id = session_id


class CacheEncodeError(ProgressEngineError):
    """Raised when a value cannot be serialized for caching."""
