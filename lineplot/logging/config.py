"""
Core logging configuration.

Provides functions to configure logging for lineplot.
"""

import atexit
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Literal, Optional

from .formatters import StructuredFormatter, ConsoleFormatter

# Type alias for log levels
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Valid log levels for runtime validation
_VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

ROOT_LOGGER_NAME = 'lineplot'

# Track active handlers for cleanup
_active_handlers: List[logging.Handler] = []
_shutdown_registered = False


def _validate_log_level(level: str) -> str:
    """
    Validate and normalize log level string.

    Args:
        level: Log level string to validate.

    Returns:
        Normalized uppercase log level.

    Raises:
        ValueError: If level is not a valid log level.
    """
    normalized = level.upper()
    if normalized not in _VALID_LOG_LEVELS:
        valid_levels = ", ".join(sorted(_VALID_LOG_LEVELS))
        raise ValueError(
            f"Invalid log level '{level}'. Must be one of: {valid_levels}"
        )
    return normalized


def _get_logging_level(level: LogLevel) -> int:
    """Convert a log level string to the logging constant."""
    return getattr(logging, _validate_log_level(level))


def shutdown_logging() -> None:
    """
    Flush and close all handlers installed by configure_logging().

    Registered with atexit on first configuration.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)

    for handler in _active_handlers[:]:
        try:
            handler.flush()
            handler.close()
        except (OSError, ValueError):
            pass  # Stream already closed at interpreter exit
        root_logger.removeHandler(handler)

    _active_handlers.clear()


def _register_shutdown() -> None:
    """Register shutdown handler if not already registered."""
    global _shutdown_registered
    if not _shutdown_registered:
        atexit.register(shutdown_logging)
        _shutdown_registered = True


def configure_logging(
    level: LogLevel = "INFO",
    log_dir: Optional[Path] = None,
    console: bool = True,
    file: bool = False,
    structured: bool = True,
) -> logging.Logger:
    """
    Configure logging for the ``lineplot`` namespace.

    Console output goes to stderr so that stdout stays reserved for the
    command's result line.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory for log files (default: <project root>/logs).
        console: Enable console output.
        file: Enable file output.
        structured: Use JSON structured format for file logs.

    Returns:
        Root logger for the 'lineplot' namespace.

    Raises:
        ValueError: If level is not a valid log level.
    """
    log_level_int = _get_logging_level(level)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(log_level_int)

    # Reconfiguring replaces previously installed handlers
    shutdown_logging()

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level_int)
        console_handler.setFormatter(ConsoleFormatter(use_colors=sys.stderr.isatty()))
        root_logger.addHandler(console_handler)
        _active_handlers.append(console_handler)

    if file:
        if log_dir is None:
            from ..paths import get_logs_dir
            log_dir = get_logs_dir()
        log_dir.mkdir(parents=True, exist_ok=True)

        log_file = log_dir / f"lineplot_{datetime.now(timezone.utc).strftime('%Y%m%d')}.log"
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        if structured:
            file_handler.setFormatter(StructuredFormatter())
        else:
            file_handler.setFormatter(ConsoleFormatter(use_colors=False))
        file_handler.setLevel(log_level_int)
        root_logger.addHandler(file_handler)
        _active_handlers.append(file_handler)

    _register_shutdown()
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the lineplot namespace prefix.

    Args:
        name: Logger name (e.g., 'data', 'plot', 'web').

    Returns:
        Logger instance.
    """
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')


# Public exports
__all__ = [
    "configure_logging",
    "shutdown_logging",
    "get_logger",
    "LogLevel",
]
