"""
Centralized logging configuration for content-safety-pipeline.

All package loggers hang off the ``content_safety`` logger, so handlers set up
here never touch the host application's root logger.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import LOG_DATE_FORMAT, LOG_FORMAT

ROOT_LOGGER_NAME = "content_safety"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Set up centralized logging for the pipeline.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        format_string: Custom format string for log messages

    Returns:
        Configured logger instance
    """
    formatter = logging.Formatter(format_string or LOG_FORMAT, LOG_DATE_FORMAT)
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # The file keeps the full debug trail whatever the console level
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(numeric_level)

    return logger


def setup_logging_from_config(
    config_dict: Dict[str, Any], verbose: bool = False
) -> logging.Logger:
    """
    Set up logging from the ``logging`` section of a configuration mapping.

    Reads ``level``, ``file`` and ``format``; ``verbose`` forces DEBUG on the
    console. Missing keys fall back to INFO, no file and the default format.
    """
    section = (config_dict or {}).get("logging") or {}
    level = "DEBUG" if verbose else section.get("level") or "INFO"
    return setup_logging(level, section.get("file"), section.get("format"))


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a specific module."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
