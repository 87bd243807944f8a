"""Logging setup for the ``primtrace`` logger namespace.

Library modules only create module loggers via ``logging.getLogger(__name__)``;
handlers are attached here, on request, by the application.
"""

from __future__ import annotations

import logging
import sys

from . import config


def setup_logging(level: int | str | None = None, log_file: str | None = None) -> logging.Logger:
    """Configure the ``primtrace`` logger.

    Args:
        level: Logging level (e.g. ``logging.DEBUG`` or ``"DEBUG"``). Defaults
            to ``config.LOG_LEVEL``.
        log_file: Optional path to also write log records to.

    Returns:
        The configured package logger.
    """
    if level is None:
        level = config.LOG_LEVEL

    logger = logging.getLogger("primtrace")
    logger.setLevel(level)

    # Re-running setup must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
