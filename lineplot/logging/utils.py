"""
Helpers that attach structured fields (error code, category, file name, ...)
to log records so both formatters can render them.
"""

import logging
import sys
import traceback
from typing import Any, Optional, Union

from .config import LogLevel, _get_logging_level
from .error_codes import ErrorCode


def _emit(logger: logging.Logger, level: int, message: str, fields: dict, exc_info=None) -> None:
    record = logger.makeRecord(logger.name, level, '', 0, message, (), exc_info)
    record.extra_fields = fields
    logger.handle(record)


def _code_fields(error_code: Optional[ErrorCode]) -> dict:
    if error_code is None:
        return {}
    return {'error_code': error_code.code, 'error_category': error_code.category}


def log_with_context(
    logger: logging.Logger,
    level: Union[int, LogLevel],
    message: str,
    error_code: Optional[ErrorCode] = None,
    **kwargs: Any,
) -> None:
    """
    Log ``message`` with keyword arguments as structured fields.

    Raises:
        ValueError: If ``level`` is an unknown level name
    """
    if isinstance(level, str):
        level = _get_logging_level(level)
    if logger.isEnabledFor(level):
        _emit(logger, level, message, {**kwargs, **_code_fields(error_code)})


def log_exception(
    logger: logging.Logger,
    message: str,
    exc: Optional[BaseException] = None,
    error_code: Optional[ErrorCode] = None,
    include_traceback: bool = True,
    **kwargs: Any,
) -> None:
    """
    Log a failure at ERROR level.

    Args:
        logger: Logger to emit on
        message: What was being attempted
        exc: The exception (the one being handled if None)
        error_code: Code to report; defaults to ``exc.error_code``, which
            every LinePlotError carries
        include_traceback: Attach the traceback to the record
        **kwargs: Extra structured fields

    Example:
        try:
            spec = build_chart(path, display)
        except LinePlotError as e:
            log_exception(logger, f"Cannot plot {path.name}", exc=e, include_traceback=False)
            raise
    """
    if exc is None:
        exc_info = sys.exc_info()
        exc = exc_info[1]
    else:
        exc_info = (type(exc), exc, exc.__traceback__)

    fields = dict(kwargs)
    if exc is not None:
        fields['exception_type'] = type(exc).__name__
        fields['exception_message'] = str(exc)
        if include_traceback and exc_info[2] is not None:
            fields['traceback'] = ''.join(traceback.format_exception(*exc_info))
        if error_code is None:
            error_code = getattr(exc, 'error_code', None)
    fields.update(_code_fields(error_code))

    attach = include_traceback and exc is not None
    _emit(logger, logging.ERROR, message, fields, exc_info if attach else None)


__all__ = [
    "log_with_context",
    "log_exception",
]
