"""Logging setup for lazystatus.

Modules log through ``logging.getLogger(__name__)``; this installs a rotating
file handler (and optionally a console handler) on the package logger.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

from .config import load_log_level

LOG_FILENAME = "lazystatus.log"
LOG_DIR_ENV = "LAZYSTATUS_LOG_DIR"
PACKAGE_LOGGER = "lazystatus"

_HANDLERS: list[logging.Handler] = []
_LOG_PATH: Path | None = None


def resolve_log_dir(log_dir: Path | str | None = None) -> Path:
    env_override = os.environ.get(LOG_DIR_ENV)
    return Path(log_dir or env_override or user_log_dir("lazystatus", appauthor=False)).expanduser()


def setup_logging(
    level: int = logging.WARNING,
    *,
    log_dir: Path | str | None = None,
    console: bool = False,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
) -> Path:
    """Attach handlers to the package logger and return the log file path.

    Calling it again replaces the handlers installed by the previous call.
    """
    global _LOG_PATH

    target_dir = resolve_log_dir(log_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    log_path = target_dir / LOG_FILENAME

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handlers: list[logging.Handler] = [
        logging.handlers.RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in _HANDLERS:
        logger.removeHandler(handler)
        handler.close()
    _HANDLERS.clear()

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        _HANDLERS.append(handler)
    logger.setLevel(level)

    _LOG_PATH = log_path
    return log_path


def configure_logging(*, log_dir: Path | str | None = None, console: bool = False) -> Path:
    """Run ``setup_logging`` at the level stored in the user config."""
    return setup_logging(load_log_level(), log_dir=log_dir, console=console)


def get_log_path() -> Path | None:
    """Return the currently configured log file if available."""
    return _LOG_PATH


__all__ = ["LOG_DIR_ENV", "configure_logging", "get_log_path", "resolve_log_dir", "setup_logging"]
