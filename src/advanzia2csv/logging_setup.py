"""Logging configuration for the ``advanzia2csv`` package.

``configure_logging(...)`` attaches a single rich handler to the package root
logger and is meant to be called once by entrypoints (CLI, API runner).
``get_logger(name)`` is what library modules use; it never attaches output
handlers, only a ``NullHandler`` until the package is configured.
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_PKG_LOGGER_NAME = "advanzia2csv"
_ENV_LEVEL = "ADVANZIA2CSV_LOG_LEVEL"
_CONFIGURED = False

# Finer than DEBUG: per-fragment rejections.
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LOG_LEVELS = ("error", "warn", "info", "debug", "trace")

_THEME = Theme({"logging.level.trace": "magenta"})


def parse_level(level: Union[int, str, None]) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        if level == "TRACE":
            return TRACE
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
        raise ValueError(f"Unknown log level: {level!r}")
    env_val = os.getenv(_ENV_LEVEL)
    if env_val:
        return parse_level(env_val)
    return logging.INFO


def configure_logging(level: Union[int, str, None] = None, *, console: Optional[Console] = None) -> None:
    """Configure the package root logger.

    The first call installs a ``RichHandler`` writing to stderr; later calls
    only change the level. ``level`` falls back to ``ADVANZIA2CSV_LOG_LEVEL``
    and then to INFO.
    """

    global _CONFIGURED
    numeric = parse_level(level)
    logger = logging.getLogger(_PKG_LOGGER_NAME)

    if _CONFIGURED:
        logger.setLevel(numeric)
        for handler in logger.handlers:
            handler.setLevel(numeric)
        return

    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = RichHandler(
        console=console or Console(stderr=True, theme=_THEME),
        show_path=False,
        log_time_format="[%Y-%m-%d %H:%M:%S]",
        markup=False,
    )
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter("[%(name)s] %(message)s"))

    logger.setLevel(numeric)
    logger.addHandler(handler)
    logger.propagate = False

    # pdfminer is chatty below WARNING on real statements.
    logging.getLogger("pdfminer").setLevel(logging.WARNING)

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
