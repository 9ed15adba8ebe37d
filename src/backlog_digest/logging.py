"""Centralized logging configuration for backlog-digest.

Provides rotating file logs with consistent formatting across all components.
Timestamps can be rendered in the report's timezone so log lines line up with
the schedule.
"""

from __future__ import annotations

import logging
import os
import re
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from zoneinfo import ZoneInfo

# Default configuration
DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "backlog_digest.log"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5
DEFAULT_LOG_LEVEL = "INFO"

ROOT_LOGGER = "backlog_digest"

# Log format
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ZoneFormatter(logging.Formatter):
    """Formatter that renders record times in a fixed timezone."""

    def __init__(self, fmt: str, datefmt: str, tz: ZoneInfo | None = None) -> None:
        super().__init__(fmt, datefmt=datefmt)
        self.tz = tz

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        if self.tz is None:
            return super().formatTime(record, datefmt)
        stamp = datetime.fromtimestamp(record.created, self.tz)
        return stamp.strftime(datefmt or DATE_FORMAT)


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    level: str | None = None,
    console: bool = True,
    timezone: str | None = None,
) -> logging.Logger:
    """Set up logging with rotating file handler.

    Args:
        log_dir: Directory for log files. Defaults to 'logs' in current directory.
                 Can be overridden with BACKLOG_DIGEST_LOG_DIR environment variable.
        log_file: Log file name. Defaults to 'backlog_digest.log'.
        max_bytes: Maximum size per log file before rotation. Defaults to 10MB.
        backup_count: Number of backup files to keep. Defaults to 5.
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to INFO.
               Can be overridden with BACKLOG_DIGEST_LOG_LEVEL environment variable.
        console: Whether to also log to console. Defaults to True.
        timezone: IANA timezone for timestamps. Defaults to local time.

    Returns:
        The root backlog_digest logger.
    """
    if log_dir is None:
        log_dir = os.environ.get("BACKLOG_DIGEST_LOG_DIR", DEFAULT_LOG_DIR)
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    if level is None:
        level = os.environ.get("BACKLOG_DIGEST_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    tz = ZoneInfo(timezone) if timezone else None
    formatter = ZoneFormatter(LOG_FORMAT, DATE_FORMAT, tz)

    log_path = log_dir / log_file
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    logger.info("Logging initialized (level=%s, file=%s)", level, log_path)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a component.

    Args:
        name: Component name (e.g., 'board', 'webhook').
              Will be prefixed with 'backlog_digest.'.

    Returns:
        Logger instance for the component.
    """
    if not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def truncate_output(output: str, max_length: int = 2000) -> str:
    """Truncate long output for logging."""
    if len(output) <= max_length:
        return output
    return output[:max_length] + f"\n... [truncated, {len(output) - max_length} more chars]"


def sanitize_for_log(text: str) -> str:
    """Remove credentials from log output.

    Trello credentials travel as query parameters and Discord webhook URLs
    embed their token in the path, so both show up in transport error messages.
    """
    patterns = [
        (r"([?&]key=)[^&\s'\"]+", r"\1[REDACTED]"),
        (r"([?&]token=)[^&\s'\"]+", r"\1[REDACTED]"),
        (r"(/api/webhooks/\d+/)[A-Za-z0-9._-]+", r"\1[REDACTED]"),
    ]

    result = text
    for pat, replacement in patterns:
        result = re.sub(pat, replacement, result)

    return result
