"""Centralized logger configuration.

The dashboard owns the terminal, so records go to a file instead of stderr.

Usage:
    from serverhelper.logging_setup import get_logger
    logger = get_logger(__name__)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "serverhelper"
LOG_FILENAME = "serverhelper.log"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME
LOG_LEVEL_ENV = "SERVERHELPER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: str | None) -> int:
    """Map a level name to a ``logging`` constant.

    An unset level falls back to ``$SERVERHELPER_LOG_LEVEL``, then INFO.
    """
    if not level:
        level = os.getenv(LOG_LEVEL_ENV)
    if not level:
        return logging.INFO
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str | None = None, log_path: Path | None = None) -> Path | None:
    """Attach a file handler to the package logger.

    Returns the log file path, or ``None`` when the file cannot be opened; in
    that case records are dropped rather than written over the dashboard.
    """
    package_logger = logging.getLogger(APP_NAME)
    package_logger.setLevel(resolve_level(level))
    package_logger.propagate = False
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    target = log_path if log_path is not None else DEFAULT_LOG_PATH
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(target, encoding="utf-8")
    except OSError:
        package_logger.addHandler(logging.NullHandler())
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    return target


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = [
    "APP_NAME",
    "DEFAULT_LOG_PATH",
    "LOG_LEVEL_ENV",
    "resolve_level",
    "setup_logging",
    "get_logger",
]
