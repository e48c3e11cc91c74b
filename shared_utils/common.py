"""
Common utility functions shared across the application.

This module provides basic utilities for timestamps, logging and flag
handling that are used by both the web app and the scoring engines.
"""

import logging
import os
from datetime import datetime, timezone
from typing import Any, Optional


# Epoch values above this are treated as milliseconds (year 5138 in seconds)
_EPOCH_MILLIS_CUTOFF = 1e11


def get_timestamp() -> datetime:
    """
    Get current timestamp as datetime object.

    Returns:
        Current datetime with microsecond precision
    """
    return datetime.now()


def get_timestamp_string(dt: Optional[datetime] = None) -> str:
    """
    Get timestamp as ISO format string.

    Args:
        dt: Datetime object to format, uses current time if None

    Returns:
        ISO format timestamp string
    """
    if dt is None:
        dt = get_timestamp()
    return dt.isoformat()


def parse_timestamp(value: Any) -> datetime:
    """
    Parse a wire timestamp into a datetime.

    Accepts datetime instances, ISO-8601 strings (a trailing 'Z' is read as
    UTC) and epoch numbers in seconds or milliseconds.

    Args:
        value: Timestamp value to parse

    Returns:
        Parsed datetime

    Raises:
        ValueError: If the value cannot be interpreted as a timestamp
    """
    if isinstance(value, datetime):
        return value

    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")

    if isinstance(value, (int, float)):
        seconds = value / 1000.0 if abs(value) > _EPOCH_MILLIS_CUTOFF else float(value)
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise ValueError(f"Invalid timestamp: {value!r}")

    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid timestamp: {value!r}")

    raise ValueError(f"Invalid timestamp: {value!r}")


def format_clock_time(dt: datetime) -> str:
    """Format a timestamp as HH:MM:SS for timeline display."""
    return dt.strftime("%H:%M:%S")


def setup_logging(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Set up logging configuration for a component.

    Args:
        name: Logger name
        level: Logging level (default: INFO)
        log_file: Optional log file path
        format_string: Optional custom format string

    Returns:
        Configured logger instance
    """
    if format_string is None:
        format_string = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(format_string))
        logger.addHandler(file_handler)

    return logger


def str_to_bool(value: str) -> bool:
    """Interpret an environment-style flag value."""
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')
