"""Logger configuration for the progress engine.

Engine modules log through the shared loguru `logger` with a bracketed
component tag in the message ("[PROGRESS]", "[STREAK]", "[ACHIEVEMENT]")
and structured context as keyword arguments (session_id, cache_key, ...).
The console sink shows the tag; the file sink also records the context.
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DDTHH:mm:ss.SSSZZ} | {level: <8} | {name}:{function}:{line} | {message} | {extra}"


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    console: bool = True,
) -> None:
    """Replace every loguru sink with the engine's console and file sinks.

    Args:
        level: Minimum level for all sinks
        log_file: Path of the rotating log file; no file sink when None
        rotation: Size or age at which the file rotates (e.g. "10 MB", "1 day")
        retention: How long rotated files are kept (e.g. "7 days")
        console: Whether to log to stderr
    """
    handlers: list[dict[str, Any]] = []
    if console:
        handlers.append({"sink": sys.stderr, "format": CONSOLE_FORMAT, "level": level, "colorize": True})
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            {
                "sink": path,
                "format": FILE_FORMAT,
                "level": level,
                "rotation": rotation,
                "retention": retention,
                "compression": "zip",
                "backtrace": True,
                "diagnose": False,
            }
        )

    logger.configure(handlers=handlers)
    logger.debug("[LOGGING] Sinks configured", level=level, log_file=log_file, console=console)


def setup_logger_from_settings() -> None:
    """Configure logging from PROGRESS_LOG_LEVEL / PROGRESS_LOG_FILE."""
    from progress_engine.config.settings import settings

    setup_logger(level=settings.log_level, log_file=settings.log_file)
