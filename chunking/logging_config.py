"""
Logging Configuration Module

Provides consistent logging setup for the chunking service and its
topic-intelligence collaborators.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

APP_LOGGERS = ("chunking", "topic_intelligence")


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging for the application packages.

    Args:
        level: Logging level (default: INFO)
        log_file: Optional path to log file
        format_string: Optional custom format string

    Returns:
        The configured ``chunking`` logger
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in APP_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Remove existing handlers to avoid duplicates
        logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)

    return logging.getLogger(APP_LOGGERS[0])


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger below the ``chunking`` namespace.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance
    """
    if name.startswith(APP_LOGGERS):
        return logging.getLogger(name)
    return logging.getLogger(f"chunking.{name}")
