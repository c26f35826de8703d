"""Logging helpers for study-assist."""

from __future__ import annotations

import logging

_LOGGER_NAME = "study_assist"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the study_assist hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(*, verbose: bool = False, level: str | None = None) -> logging.Logger:
    """Configure the package logger with a single stderr handler."""
    if verbose:
        resolved = logging.DEBUG
    else:
        resolved = logging.getLevelName((level or "WARNING").upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(resolved)
    logger.propagate = False

    # Reset handlers so repeated CLI invocations do not duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter("[study-assist] %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "get_logger"]
