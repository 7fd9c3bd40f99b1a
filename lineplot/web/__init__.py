"""
Web service for lineplot.

Accepts CSV uploads, plots them through the same pipeline as the command line
and redirects to the generated page.
"""

from .session import (
    SessionState,
    UploadPart,
    UploadJob,
    UploadResult,
    UploadSessionManager,
)
from .app import create_app, serve

__all__ = [
    'SessionState',
    'UploadPart',
    'UploadJob',
    'UploadResult',
    'UploadSessionManager',
    'create_app',
    'serve',
]
