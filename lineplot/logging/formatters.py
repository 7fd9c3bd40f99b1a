"""
Console and JSON formatters, plus the per-request context they render.

Context values live in a ``ContextVar``: a web request handled on one thread
only ever sees the phase, source file and request id it set itself.
"""

import json
import logging
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional


# Replaced, never mutated in place
_context: ContextVar[Mapping[str, Any]] = ContextVar('lineplot_log_context', default={})


def get_context_value(key: str) -> Optional[Any]:
    """Return the context value stored under ``key``, or None."""
    return _context.get().get(key)


def set_context_value(key: str, value: Any) -> None:
    """Store ``value`` under ``key`` for the current thread or task."""
    _context.set({**_context.get(), key: value})


def clear_context_value(key: str) -> None:
    """Drop ``key`` from the current context, if present."""
    current = _context.get()
    if key in current:
        _context.set({k: v for k, v in current.items() if k != key})


def has_context_value(key: str) -> bool:
    return key in _context.get()


def _get_all_context() -> Dict[str, Any]:
    return dict(_context.get())


def _record_time(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


class StructuredFormatter(logging.Formatter):
    """
    One JSON object per line, for the rotating log file.

    Keys: ``timestamp`` (UTC, ISO 8601), ``level``, ``logger``, ``message``;
    ``context`` when a LogContext is active, ``extra`` when the record came
    from log_with_context/log_exception, ``exception`` when exc_info is set.
    DEBUG records also carry their ``source`` location.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": _record_time(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = _get_all_context()
        if context:
            payload["context"] = context

        extra_fields = getattr(record, 'extra_fields', None)
        if extra_fields:
            payload["extra"] = extra_fields

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            payload["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
                "traceback": self.formatException(record.exc_info),
            }

        if record.levelno <= logging.DEBUG:
            payload["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        return json.dumps(payload, default=str)


class ConsoleFormatter(logging.Formatter):
    """
    Single-line stderr output.

        2024-01-02 03:04:05 | WARNING  | web | Upload failed [phase=upload, request_id=ab12] (code=WEB_001)

    Only the phase, source and request_id context keys are shown, in that
    order. The logger name is shortened to its last component.
    """

    LEVEL_COLORS = {
        'DEBUG': '\033[2m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[1;31m',
    }
    RESET = '\033[0m'

    CONTEXT_KEYS = ('phase', 'source', 'request_id')

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def _context_suffix(self) -> str:
        context = _get_all_context()
        parts = [f"{key}={context[key]}" for key in self.CONTEXT_KEYS if context.get(key)]
        return f" [{', '.join(parts)}]" if parts else ""

    def format(self, record: logging.LogRecord) -> str:
        line = " | ".join((
            _record_time(record).strftime("%Y-%m-%d %H:%M:%S"),
            record.levelname.ljust(8),
            record.name.rsplit('.', 1)[-1],
            record.getMessage(),
        ))
        line += self._context_suffix()

        extra_fields = getattr(record, 'extra_fields', None) or {}
        if 'error_code' in extra_fields:
            line += f" (code={extra_fields['error_code']})"

        color = self.LEVEL_COLORS.get(record.levelname) if self.use_colors else None
        if color:
            line = f"{color}{line}{self.RESET}"

        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


__all__ = [
    "StructuredFormatter",
    "ConsoleFormatter",
    "get_context_value",
    "set_context_value",
    "clear_context_value",
    "has_context_value",
]
