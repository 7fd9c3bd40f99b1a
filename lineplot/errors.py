"""
Exception hierarchy for lineplot.

Every exception carries an ``ErrorCode`` so callers can branch on the kind of
failure instead of its message, and so log records can report the code.
"""

from typing import Optional

from .logging.error_codes import ErrorCode


class LinePlotError(Exception):
    """Base class for all lineplot errors."""

    default_code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, error_code: Optional[ErrorCode] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code

    def __str__(self) -> str:
        return self.message


class LoadError(LinePlotError):
    """Raised when a CSV source is unreadable, malformed or empty."""

    default_code = ErrorCode.DATA_LOAD_FAILED


class ValidationError(LinePlotError):
    """Raised when series data or display parameters are inconsistent."""

    default_code = ErrorCode.NO_SERIES


class AssemblyError(LinePlotError):
    """Raised when a page cannot be assembled or written."""

    default_code = ErrorCode.IO_WRITE_ERROR


class UploadError(LinePlotError):
    """Raised when an upload request is rejected or cannot be staged."""

    default_code = ErrorCode.STAGE_FAILED


class StartupError(LinePlotError):
    """Raised when the web service cannot prepare its directories."""

    default_code = ErrorCode.STARTUP_FAILED


__all__ = [
    'LinePlotError',
    'LoadError',
    'ValidationError',
    'AssemblyError',
    'UploadError',
    'StartupError',
]
