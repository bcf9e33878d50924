"""Logging setup for command-line runs."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

PACKAGE_LOGGER = "apocalypse_search"


def setup_logger(level: int = logging.WARNING, log_path: Path | None = None) -> logging.Logger:
    """Configure the package logger for console output and an optional log file.

    Args:
        level: Level for console output.
        log_path: If given, also append everything at DEBUG to this file.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if log_path else level)

    # Clear any existing handlers
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(console_handler)

    if log_path is not None:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    return logger


def level_from_flags(info: bool = False, debug: bool = False) -> int:
    """Map the --info/--debug flags to a logging level (WARNING by default)."""
    if debug:
        return logging.DEBUG
    if info:
        return logging.INFO
    return logging.WARNING
