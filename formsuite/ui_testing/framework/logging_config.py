"""
Centralized Loguru configuration for harness runs.

Call `init_logger()` once at the start of a run (the root conftest does)
so every framework module logs with the same format and level.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "{name}:{function}:{line} | {message}"
)

_logger_initialized: bool = False


def init_logger(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_str: str = DEFAULT_FORMAT,
    force: bool = False,
) -> None:
    """
    Initialize the global Loguru logger with consistent configuration.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path of a rotating log file
        format_str: Log format string
        force: Re-initialize even if already configured
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format=format_str,
        colorize=True,
        backtrace=True,
        diagnose=True,
    )

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=level.upper(),
            format=format_str.replace("{level: <8}", "{level}"),
            rotation="10 MB",
            retention="7 days",
            compression="zip",
            encoding="utf-8",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized at level {level.upper()}")


__all__ = ["init_logger", "DEFAULT_FORMAT"]
