"""Logging configuration for the application.

``setup_logging`` configures the root logger with a console handler and an
optional file handler. It is safe to call more than once; only the first call
attaches handlers.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``), case insensitive.
    logfile : Optional[str]
        Path of a file to log to as well. Resolved against the current
        working directory. Omit for console only.
    """
    logger = logging.getLogger()
    if logger.handlers:
        # Already configured (tests, repeated create_app calls).
        return

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
