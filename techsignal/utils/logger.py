"""loguru sinks for the techsignal command line.

Importing this module leaves the host application's sinks alone;
only ``setup_logger`` adds handlers, and it only ever replaces its own.
"""
import sys
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

# Handler ids added by setup_logger
_handler_ids: list[int] = []


def setup_logger(
    log_file: Optional[str] = "logs/techsignal.log",
    level: str = "INFO",
    rotation: str = "10 MB",
    retention: str = "30 days",
    console: bool = True,
) -> list[int]:
    """Install console and rotating file sinks.

    Calling it again swaps out the sinks from the previous call. The first
    call with ``console`` also drops loguru's stock stderr handler so console
    lines are not printed twice.

    Args:
        log_file: Log file path, or None for console only
        level: Minimum level (DEBUG, INFO, WARNING, ERROR)
        rotation: Rotate the file at this size or interval
        retention: Keep rotated files this long
        console: Also log to stderr

    Returns:
        Ids of the handlers added
    """
    reset_logger()

    if console:
        try:
            logger.remove(0)
        except ValueError:
            pass
        _handler_ids.append(logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT))

    if log_file:
        _handler_ids.append(logger.add(
            log_file,
            level=level,
            format=FILE_FORMAT,
            rotation=rotation,
            retention=retention,
            encoding="utf-8",
        ))

    return list(_handler_ids)


def reset_logger() -> None:
    """Remove the sinks installed by setup_logger, keeping all others."""
    while _handler_ids:
        logger.remove(_handler_ids.pop())


def get_logger(name: str):
    """Return the shared logger with ``name`` bound in its extra context."""
    return logger.bind(name=name)
