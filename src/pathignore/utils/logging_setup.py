"""
Logging configuration for pathignore.

Provides environment-aware logging that:
- Writes to stderr so command output on stdout stays machine-readable
- Outputs JSON records when PATHIGNORE_LOG_FORMAT=json
- Supports log rotation for file-based logging
- Includes custom TRACE level for per-path match decisions
"""

import sys
import logging
import json
import os
from datetime import datetime, timezone
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional, Any

from ..constants import ENV_LOG_LEVEL, ENV_LOG_FORMAT, DEFAULT_LOG_LEVEL

# Define TRACE level (lower number = more detailed)
TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")

TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def trace(self, message, *args, **kwargs):
    if self.isEnabledFor(TRACE_LEVEL):
        self._log(TRACE_LEVEL, message, args, **kwargs)


logging.Logger.trace = trace


def add_trace_to_logger():
    """Ensure trace method is available on all logger instances"""
    if not hasattr(logging.Logger, 'trace'):
        logging.Logger.trace = trace


class JsonFormatter(logging.Formatter):
    """One JSON object per record, for log collectors"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'component': record.name,
            'message': record.getMessage(),
            'pid': os.getpid(),
        }

        if hasattr(record, 'extra'):
            log_data.update(record.extra)

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def resolve_level(log_level: Optional[str] = None) -> int:
    """
    Turn a level name into a numeric level.

    Args:
        log_level: Level name; falls back to PATHIGNORE_LOG_LEVEL, then
            LOG_LEVEL, then WARNING

    Returns:
        Numeric logging level (TRACE is understood)
    """
    level_str = (
        log_level
        or os.environ.get(ENV_LOG_LEVEL)
        or os.environ.get('LOG_LEVEL', DEFAULT_LOG_LEVEL)
    )
    if level_str.upper() == 'TRACE':
        return TRACE_LEVEL
    return getattr(logging, level_str.upper(), logging.WARNING)


def configure_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    enable_rotation: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    quiet_libraries: bool = True,
) -> None:
    """
    Configure logging based on environment.

    Args:
        log_level: Override log level (defaults to PATHIGNORE_LOG_LEVEL env var or WARNING)
        log_file: Optional path to an additional log file
        enable_rotation: Enable log rotation for file handler
        max_bytes: Maximum size of log file before rotation
        backup_count: Number of backup files to keep
        quiet_libraries: Suppress verbose third-party library logs
    """
    add_trace_to_logger()
    level = resolve_level(log_level)

    root_logger = logging.getLogger()
    root_logger.handlers = []

    use_json = os.environ.get(ENV_LOG_FORMAT, '').lower() == 'json'

    handler = logging.StreamHandler(sys.stderr)
    if use_json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    root_logger.addHandler(handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        if enable_rotation:
            file_handler = RotatingFileHandler(
                str(log_path),
                maxBytes=max_bytes,
                backupCount=backup_count
            )
        else:
            file_handler = logging.FileHandler(str(log_path))
        file_handler.setFormatter(logging.Formatter(TEXT_FORMAT))
        root_logger.addHandler(file_handler)

    root_logger.setLevel(level)

    if quiet_libraries:
        # watchdog's inotify backend is chatty at DEBUG
        logging.getLogger('watchdog').setLevel(logging.WARNING)

    logger = logging.getLogger('pathignore')
    logger.debug(f"Logging configured - Level: {logging.getLevelName(level)}, JSON: {use_json}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    add_trace_to_logger()
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any
) -> None:
    """
    Log a message with additional context fields.

    Args:
        logger: Logger instance
        level: Log level (e.g., logging.INFO)
        message: Log message
        **context: Additional fields to include in structured logs
    """
    extra = {'extra': context} if context else {}
    logger.log(level, message, extra=extra)
