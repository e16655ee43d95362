"""Timezone utility functions for day attribution.

Central helper for timezone operations:
- Resolve the configured timezone name to a ZoneInfo
- Convert timestamps to UTC
- Attribute a timestamp to a local calendar day
"""

from collections.abc import Callable
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger

# Returns the current time as a timezone-aware datetime
Clock = Callable[[], datetime]


def get_timezone(name: str | None) -> ZoneInfo:
    """Resolve an IANA timezone name.

    Args:
        name: IANA timezone identifier (e.g. "Europe/Madrid")

    Returns:
        ZoneInfo for the name, defaults to UTC if invalid/missing
    """
    try:
        return ZoneInfo(name or "UTC")
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone {name!r}, falling back to UTC")
        return ZoneInfo("UTC")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """Convert datetime to UTC.

    Args:
        dt: Datetime (timezone-aware or naive)

    Returns:
        Datetime in UTC timezone
    """
    if dt.tzinfo is None:
        # Assume UTC if naive
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def local_date(dt: datetime, tz: ZoneInfo) -> date:
    """Return the calendar day dt falls on in tz."""
    return to_utc(dt).astimezone(tz).date()


def local_midnight(d: date, tz: ZoneInfo) -> datetime:
    """Return 00:00 of day d in tz as an aware datetime."""
    return datetime(d.year, d.month, d.day, tzinfo=tz)
