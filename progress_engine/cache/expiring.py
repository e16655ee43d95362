"""In-memory TTL cache for expensive or externally sourced results.

Values cross a byte boundary: `set` serializes to JSON bytes and `get`
decodes into the type the caller asks for. The cache itself never casts or
inspects payloads, so independent call sites (AI suggestions, quotes,
analyses) can share one instance.

Expiry is evaluated lazily on read; there is no background sweep and no
size bound. A cache is an optimization only: a miss, a stale entry and an
entry that fails to decode all read as "not cached", and callers recompute.
Cached values of None are indistinguishable from a miss.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Generic, TypeVar

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from progress_engine.config.settings import settings
from progress_engine.core.errors import CacheEncodeError

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: bytes
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


@lru_cache(maxsize=256)
def _adapter(value_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(value_type)


class ExpiringCache:
    """Thread-safe key -> value store with per-entry time-to-live.

    Args:
        clock: Returns the current time in seconds (default: time.time)
        default_ttl: TTL used when `set` is called without one
            (default: PROGRESS_DEFAULT_CACHE_TTL)
        name: Label used in log messages
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        default_ttl: float | None = None,
        name: str = "cache",
    ) -> None:
        self._clock = clock
        self._default_ttl = default_ttl if default_ttl is not None else settings.default_cache_ttl_seconds
        self._name = name
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get_raw(self, key: str) -> bytes | None:
        """Return the stored bytes for key, or None on miss/expiry."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.debug(f"{self._name}: Cache miss", cache_key=key)
                return None
            if entry.is_expired(now):
                # Lazy eviction
                del self._entries[key]
                logger.debug(f"{self._name}: Cache entry expired", cache_key=key)
                return None
            return entry.value

    def get(self, key: str, value_type: Any) -> Any | None:
        """Return the cached value decoded as `value_type`, or None.

        Decode failures are logged and treated as a miss.
        """
        raw = self.get_raw(key)
        if raw is None:
            return None
        try:
            value = _adapter(value_type).validate_json(raw)
        except ValidationError as e:
            logger.warning(
                f"{self._name}: Cached value failed to decode, treating as miss",
                cache_key=key,
                error=str(e),
            )
            return None
        logger.debug(f"{self._name}: Cache hit", cache_key=key)
        return value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store value under key, replacing any existing entry.

        Args:
            key: Request fingerprint
            value: Any JSON-serializable value (pydantic models, dataclasses, builtins)
            ttl: Time-to-live in seconds (default: the cache's default TTL)

        Raises:
            ValueError: If ttl is not positive
            CacheEncodeError: If value cannot be serialized
        """
        lifetime = self._default_ttl if ttl is None else ttl
        if lifetime <= 0:
            raise ValueError(f"Cache TTL must be positive, got {lifetime}")
        try:
            data = _adapter(Any).dump_json(value)
        except (TypeError, ValueError) as e:
            raise CacheEncodeError(f"Cannot cache value for key {key!r}: {e}") from e

        entry = CacheEntry(key=key, value=data, expires_at=self._clock() + lifetime)
        with self._lock:
            self._entries[key] = entry
        logger.debug(f"{self._name}: Cache set", cache_key=key, ttl=lifetime)

    def get_or_compute(
        self,
        key: str,
        value_type: Any,
        compute: Callable[[], T],
        ttl: float | None = None,
    ) -> T:
        """Return the cached value, or compute, cache and return it.

        The computed value is returned even if it cannot be cached.
        """
        cached = self.get(key, value_type)
        if cached is not None:
            return cached
        value = compute()
        try:
            self.set(key, value, ttl)
        except CacheEncodeError as e:
            logger.error(f"{self._name}: Failed to cache computed value", cache_key=key, error=str(e))
        return value

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.debug(f"{self._name}: Cache cleared")

    def purge_expired(self) -> int:
        """Drop every expired entry now. Returns the number removed."""
        now = self._clock()
        with self._lock:
            expired = [k for k, entry in self._entries.items() if entry.is_expired(now)]
            for k in expired:
                del self._entries[k]
        return len(expired)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and not entry.is_expired(now)

    def __len__(self) -> int:
        now = self._clock()
        with self._lock:
            return sum(1 for entry in self._entries.values() if not entry.is_expired(now))


class TypedCacheView(Generic[T]):
    """A call site's view of a shared cache, bound to one value type and TTL."""

    def __init__(self, cache: ExpiringCache, value_type: Any, ttl: float, key_prefix: str = "") -> None:
        self._cache = cache
        self._value_type = value_type
        self._ttl = ttl
        self._key_prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    def get(self, key: str) -> T | None:
        return self._cache.get(self._key(key), self._value_type)

    def set(self, key: str, value: T, ttl: float | None = None) -> None:
        self._cache.set(self._key(key), value, self._ttl if ttl is None else ttl)

    def get_or_compute(self, key: str, compute: Callable[[], T]) -> T:
        return self._cache.get_or_compute(self._key(key), self._value_type, compute, self._ttl)

    def invalidate(self, key: str) -> None:
        self._cache.invalidate(self._key(key))
