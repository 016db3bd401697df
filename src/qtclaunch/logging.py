"""Logger setup for the ``qtclaunch`` namespace."""

from __future__ import annotations

import logging as py_logging
import os
import sys
from pathlib import Path
from typing import TextIO

LOG_LEVELS = {
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}
LOGGER_NAME = "qtclaunch"
LOG_FILE_ENV = "QTCLAUNCH_LOG_FILE"
DEFAULT_LOG_PATH = Path("~/.config/qtclaunch/logs/qtclaunch.log")
_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


def normalize_level(level: str) -> str | None:
    """Canonical level name, or ``None`` when ``level`` is not accepted."""
    normalized = level.strip().upper()
    if normalized == "WARNING":
        normalized = "WARN"
    return normalized if normalized in LOG_LEVELS else None


def _absolute(path: str | Path) -> Path:
    candidate = Path(path)
    try:
        candidate = candidate.expanduser()
    except RuntimeError:
        # No resolvable home directory; keep "~" literal under the cwd.
        pass
    return candidate if candidate.is_absolute() else candidate.resolve()


def default_log_path() -> Path:
    override = os.getenv(LOG_FILE_ENV, "").strip()
    return _absolute(override or DEFAULT_LOG_PATH)


def _file_handler(path: Path, formatter: py_logging.Formatter) -> py_logging.Handler | None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = py_logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return None
    handler.setLevel(py_logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    level: str = "INFO",
    stream: TextIO | None = None,
    *,
    log_file: str | Path | None = None,
) -> py_logging.Logger:
    resolved = LOG_LEVELS[normalize_level(level) or "INFO"]

    logger = py_logging.getLogger(LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.setLevel(resolved)
    logger.propagate = False
    formatter = py_logging.Formatter(_FORMAT)

    console = py_logging.StreamHandler(stream or sys.stderr)
    console.setLevel(resolved)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file:
        handler = _file_handler(_absolute(log_file), formatter)
        if handler is not None:
            logger.addHandler(handler)
    return logger
