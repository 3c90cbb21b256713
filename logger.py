"""Logging configuration for FinFlow.

Sets up the "finflow" logger with a dated log file and console output.
Modules fetch it with get_logger() at import time; handlers are attached
later by setup_logging() from the CLI entry point.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from config import Config

LOGGER_NAME = "finflow"


def log_file_path(config: Config, on: Optional[date] = None) -> Path:
    """Get the log file for a given day (today by default).

    One file per day: finflow-YYYY-MM-DD.log inside config.log_dir.
    """
    on = on or date.today()
    return config.log_dir / f"{LOGGER_NAME}-{on.isoformat()}.log"


def setup_logging(config: Config) -> logging.Logger:
    """Set up application logging with file and console handlers.

    Args:
        config: Application configuration containing log_dir and log_level.

    Returns:
        The configured finflow logger.
    """
    # Log directory lives under the FinFlow base dir unless overridden
    config.log_dir.mkdir(parents=True, exist_ok=True)

    # Shared by every module through get_logger()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.log_level)

    # Drop handlers from an earlier call so lines are not written twice
    logger.handlers.clear()

    # Timestamps go to the file only
    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_formatter = logging.Formatter("%(levelname)s - %(message)s")

    # File handler, one file per day
    file_handler = logging.FileHandler(log_file_path(config))
    file_handler.setLevel(config.log_level)
    file_handler.setFormatter(detailed_formatter)

    # Console handler (stderr)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.log_level)
    console_handler.setFormatter(console_formatter)

    # Attach both
    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def get_logger() -> logging.Logger:
    """Get the application logger.

    Returns:
        The finflow logger, configured or not.
    """
    return logging.getLogger(LOGGER_NAME)
