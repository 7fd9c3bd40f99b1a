"""
Error codes for structured error tracking.

Provides the closed set of error kinds raised by lineplot. Every exception in
``lineplot.errors`` carries one of these, and log records emitted through
``log_exception`` expose its code and category.
"""

from enum import Enum
from typing import NamedTuple


class ErrorCodeInfo(NamedTuple):
    """Container for error code information."""
    code: str
    category: str
    description: str


class ErrorCode(Enum):
    """
    Enumeration of error codes for structured logging.

    Each error code has:
    - code: Unique identifier (e.g., "DATA_001")
    - category: Error category (e.g., "data", "validation")
    - description: Human-readable description

    Usage:
        log_exception(
            logger,
            "Failed to load data",
            exc=e,
            error_code=ErrorCode.DATA_LOAD_FAILED,
        )
    """

    # Data errors (DATA_xxx)
    DATA_LOAD_FAILED = ErrorCodeInfo("DATA_001", "data", "Failed to load data from source")
    DATA_EMPTY = ErrorCodeInfo("DATA_002", "data", "Data source contains no records")
    DATA_NOT_RECTANGULAR = ErrorCodeInfo("DATA_003", "data", "Data rows have differing column counts")
    DATA_PARSE_ERROR = ErrorCodeInfo("DATA_004", "data", "Failed to parse delimited data")

    # Validation errors (VAL_xxx)
    NO_SERIES = ErrorCodeInfo("VAL_010", "validation", "At least one series with one data item is required")
    SERIES_LENGTH_MISMATCH = ErrorCodeInfo("VAL_011", "validation", "Series contain differing numbers of items")
    AXIS_LENGTH_MISMATCH = ErrorCodeInfo("VAL_012", "validation", "X-axis length differs from series length")
    NAME_COUNT_MISMATCH = ErrorCodeInfo("VAL_013", "validation", "Series name count differs from series count")
    INVALID_DIMENSION = ErrorCodeInfo("VAL_014", "validation", "Chart width and height must not be negative")
    TITLE_COUNT_MISMATCH = ErrorCodeInfo("VAL_015", "validation", "Title count differs from data file count")

    # Configuration errors (CFG_xxx)
    CONFIG_LOAD_ERROR = ErrorCodeInfo("CFG_001", "config", "Failed to load configuration")
    CONFIG_INVALID = ErrorCodeInfo("CFG_002", "config", "Configuration is invalid")

    # Assembly errors (ASM_xxx)
    EMPTY_PAGE = ErrorCodeInfo("ASM_001", "assembly", "A page needs at least one chart")
    RENDER_FAILED = ErrorCodeInfo("ASM_002", "assembly", "Chart rendering failed")

    # File/IO errors (IO_xxx)
    IO_WRITE_ERROR = ErrorCodeInfo("IO_002", "io", "Failed to write file")
    IO_PATH_ERROR = ErrorCodeInfo("IO_003", "io", "Invalid or missing path")

    # Web upload errors (WEB_xxx)
    PAYLOAD_TOO_LARGE = ErrorCodeInfo("WEB_001", "web", "Upload exceeds the maximum allowed size")
    STAGE_FAILED = ErrorCodeInfo("WEB_002", "web", "Failed to store an uploaded file")
    NO_UPLOAD = ErrorCodeInfo("WEB_003", "web", "No file was uploaded")
    STARTUP_FAILED = ErrorCodeInfo("WEB_004", "web", "Web service could not be started")

    # General errors (GEN_xxx)
    INTERNAL_ERROR = ErrorCodeInfo("GEN_002", "general", "An internal error occurred")

    @property
    def code(self) -> str:
        """Get the error code identifier."""
        return self.value.code

    @property
    def category(self) -> str:
        """Get the error category."""
        return self.value.category

    @property
    def description(self) -> str:
        """Get the error description."""
        return self.value.description

    def __str__(self) -> str:
        return f"{self.code}: {self.description}"


# Public exports
__all__ = [
    "ErrorCode",
    "ErrorCodeInfo",
]
