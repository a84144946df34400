"""
Centralized logging utilities for the collage layout engine.

Defines a shared logger instance and setup function so every module
logs through the same configuration. Library code only emits DEBUG and
WARNING records (INFO for project rehydration); the CLI decides the
effective level.
"""

import logging
from typing import TextIO

from collage_layout.constants import LOG_FORMAT

LOGGER_NAME = "collage_layout"


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        msg = f"Unknown log level: {level}"
        raise ValueError(msg)
    return resolved


def setup_logger(
        name: str = LOGGER_NAME,
        level: str | int = logging.INFO,
        stream: TextIO | None = None,
        fmt: str = LOG_FORMAT,
) -> logging.Logger:
    """
    Return the named logger at ``level``, attaching a handler once.

    Calling it again for the same name only re-applies the level, so the
    CLI can use it to change verbosity after import.

    Args:
        name: Logger name.
        level: Level name such as ``"DEBUG"`` or a numeric level.
        stream: Stream for the first handler; stderr when omitted.
        fmt: Record format for the first handler.

    Returns:
        The configured logger.

    Raises:
        ValueError: If ``level`` is an unknown level name.

    """
    logger_instance = logging.getLogger(name)
    logger_instance.setLevel(_resolve_level(level))
    if not logger_instance.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(fmt))
        logger_instance.addHandler(handler)
        logger_instance.propagate = False
    return logger_instance


def set_log_level(level: str | int) -> None:
    """Set the shared logger level from a name like "DEBUG" or an int."""
    setup_logger(logger.name, level)


# Shared logger used across modules
logger = setup_logger()
