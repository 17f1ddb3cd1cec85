"""Logging helpers routing records through a rich console handler.

Usage:
    from gitter.logger import get_logger

    logger = get_logger(__name__)
    logger.debug("Running git log")
"""

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LEVEL = "WARNING"


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a logger with a rich handler attached.

    Args:
        name: Logger name, normally ``__name__`` of the calling module
        level: Logging level name. Falls back to ``LOG_LEVEL`` or WARNING;
               unknown names in the environment also fall back to WARNING.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    if level is None:
        level = os.getenv("LOG_LEVEL", DEFAULT_LEVEL).upper()
        if level not in LOG_LEVELS:
            level = DEFAULT_LEVEL

    logger.setLevel(level.upper())

    handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)

    # Keep propagation so pytest's caplog sees our records
    logger.propagate = True

    return logger


def set_level(level: str) -> None:
    """Change the level of every gitter logger at once."""
    level = level.upper()
    for name, logger in logging.root.manager.loggerDict.items():
        if name.startswith("gitter") and isinstance(logger, logging.Logger):
            logger.setLevel(level)
