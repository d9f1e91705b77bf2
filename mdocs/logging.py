"""Logging utilities for mdocs runs."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "mdocs"
_CONSOLE_FORMAT = "[mdocs] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the mdocs hierarchy."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def _add_handler(logger: logging.Logger, handler: logging.Handler, fmt: str) -> None:
    handler.setLevel(logger.level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send mdocs records to stderr (DEBUG with `verbose`) and optionally to `log_file`."""
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False

    # Repeated CLI invocations in one process would otherwise duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    _add_handler(logger, logging.StreamHandler(), _CONSOLE_FORMAT)
    if log_file is not None:
        _add_handler(logger, logging.FileHandler(log_file, encoding="utf-8"), _FILE_FORMAT)
    return logger


__all__ = ["configure_logging", "get_logger"]
