"""Canonical calendar helpers shared by windowing and streak tracking.

Week boundaries are Monday-Sunday (ISO week). All helpers operate on
local calendar dates; callers convert timestamps with
`progress_engine.utils.timezone.local_date` first.
"""

import calendar
from datetime import date, timedelta


def week_start(d: date) -> date:
    """Return Monday of the calendar week containing d."""
    return d - timedelta(days=d.weekday())


def week_end(d: date) -> date:
    """Return Sunday of the calendar week containing d."""
    return week_start(d) + timedelta(days=6)


def month_start(d: date) -> date:
    """Return the first day of the month containing d."""
    return d.replace(day=1)


def year_start(d: date) -> date:
    """Return January 1 of the year containing d."""
    return d.replace(month=1, day=1)


def previous_day(d: date) -> date:
    return d - timedelta(days=1)


def subtract_months(d: date, months: int) -> date:
    """Move d back by whole months, clamping to the last day of the target month.

    Example:
        >>> subtract_months(date(2024, 3, 31), 1)
        datetime.date(2024, 2, 29)
    """
    total = d.year * 12 + (d.month - 1) - months
    year, month_index = divmod(total, 12)
    month = month_index + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last_day))


def subtract_years(d: date, years: int) -> date:
    return subtract_months(d, years * 12)
