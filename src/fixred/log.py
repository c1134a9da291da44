"""Logging setup. Verbosity comes from the FIXRED_LOG environment variable."""

from __future__ import annotations
import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOG_ENV = "FIXRED_LOG"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def level_from_env(default: int = logging.WARNING) -> int:
    """Map $FIXRED_LOG (e.g. "debug", "info") to a logging level."""
    value = os.environ.get(LOG_ENV, "").strip().lower()
    return _LEVELS.get(value, default)


def setup_logging(name: str = "fixred", level: int | None = None) -> logging.Logger:
    """Set up logging with a Rich handler on stderr."""
    if level is None:
        level = level_from_env()
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()

    # stdout may carry the fixed text, so logs go to stderr
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    logger.addHandler(handler)
    return logger
