"""Human-readable formatting for progress values."""


def format_duration(seconds: float) -> str:
    """Format a duration as "1h 5m" or "45m"."""
    total = int(seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_percentage(fraction: float) -> str:
    return f"{fraction * 100:.0f}%"


def format_progress(fraction: float) -> str:
    """Format a signed fractional change, e.g. 0.12 -> "+12%"."""
    if fraction >= 0:
        return f"+{fraction * 100:.0f}%"
    return f"{fraction * 100:.0f}%"
