"""
Logging context management.

Provides a context manager that adds pipeline phase, input source and request
id to every log record emitted inside the block.
"""

from contextlib import contextmanager
from typing import Generator, Optional

from .formatters import (
    _context,
    get_context_value,
    set_context_value,
    clear_context_value,
    has_context_value,
)


def reset_context() -> None:
    """
    Clear all context values at once.

    Useful between CLI runs or test cases.
    """
    _context.set({})


@contextmanager
def LogContext(
    phase: str,
    source: Optional[str] = None,
    request_id: Optional[str] = None,
) -> Generator[None, None, None]:
    """
    Context manager for adding context to all logs within the block.

    The previous context is restored on exit, whether the block raised or not.

    Usage:
        with LogContext(phase="upload", request_id="3f2a9c"):
            manager.handle(job)  # All logs within include the request id

    Args:
        phase: Pipeline phase (e.g., "load", "plot", "upload").
        source: Optional input identifier (file name).
        request_id: Optional web request identifier.
    """
    previous = _context.get()
    set_context_value('phase', phase)
    if source is not None:
        set_context_value('source', source)
    if request_id is not None:
        set_context_value('request_id', request_id)
    try:
        yield
    finally:
        _context.set(previous)


# Public exports
__all__ = [
    "LogContext",
    "reset_context",
    "get_context_value",
    "set_context_value",
    "clear_context_value",
    "has_context_value",
]
