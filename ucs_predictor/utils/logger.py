"""Logging setup for the UCS predictor."""

import logging
import sys
from pathlib import Path
from typing import Optional

LOGGER_NAME = "ucs_predictor"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: int | str) -> int:
    """Accept a level name ("debug", "WARNING") or number; unknown names fall back to INFO."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logger(
    name: str = LOGGER_NAME,
    level: int | str = logging.INFO,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure the app logger once per process.

    Streamlit re-executes app.py on every interaction, so later calls return
    the already-configured logger without adding handlers.

    Args:
        name: Logger name.
        level: Level number or name, e.g. the LOG_LEVEL setting.
        log_file: Also append to this file (parent dirs are created).

    Returns:
        Configured logger.
    """
    log = logging.getLogger(name)
    if log.handlers:
        return log

    log.setLevel(_resolve_level(level))
    fmt = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    for h in handlers:
        h.setFormatter(fmt)
        log.addHandler(h)
    return log


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    return logging.getLogger(name)
