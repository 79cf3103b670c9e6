"""Logging helpers for typecore components.

Purpose:
    Provide a centralised helper for configuring module-level loggers with a
    consistent formatter and level.
External Dependencies:
    Uses only the Python standard library `logging` module. Callers such as
    the CLI may hand in their own handler (for example rich's
    ``RichHandler``).
Fallback Semantics:
    A logger that already carries handlers keeps them; only its level is
    updated when one is given.
"""

from __future__ import annotations

import logging
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logger(
    name: str,
    level: int | str | None = None,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Return a logger configured with a standard formatter.

    Args:
        name: Name of the logger to retrieve.
        level: Optional logging level override (number or level name). Defaults
            to ``logging.INFO`` when no handlers are configured on the logger.
        handler: Handler to attach when the logger has none. A plain
            ``StreamHandler`` with ``DEFAULT_FORMAT`` is used otherwise.

    Returns:
        logging.Logger: Configured logger instance.
    """

    logger = logging.getLogger(name)
    if isinstance(level, str):
        level = level.upper()

    if not logger.handlers:
        if handler is None:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(level if level is not None else logging.INFO)
    elif level is not None:
        logger.setLevel(level)

    return logger


__all__ = ["DEFAULT_FORMAT", "configure_logger"]
