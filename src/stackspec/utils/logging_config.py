"""Logging setup shared by stackspec modules and scripts."""

from __future__ import annotations

import logging

from stackspec.config import STACKSPEC_LOG_LEVEL

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_HANDLER_NAME = "stackspec"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the ``stackspec`` hierarchy."""
    return logging.getLogger(name)


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a stream handler to the ``stackspec`` root logger.

    Calling this more than once only updates the level.

    Args:
        level: Level name or number. Defaults to ``STACKSPEC_LOG_LEVEL``.

    Returns:
        The configured ``stackspec`` logger.
    """
    logger = logging.getLogger("stackspec")
    resolved = level if level is not None else STACKSPEC_LOG_LEVEL
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING
    logger.setLevel(resolved)

    if not any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(handler)
    return logger
