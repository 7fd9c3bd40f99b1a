"""
Upload session management for the web service.

One ``UploadJob`` per request moves through
RECEIVED → STAGED → PROCESSED → CLEANED, or to FAILED from any state:

- the summed declared part sizes are checked against the cap before anything
  touches the disk;
- every part is copied into its own uniquely named temp file;
- one chart per staged file is built and the page is written to a uniquely
  named file in the output directory;
- staged files are removed on every exit path.

The manager holds only immutable configuration, so one instance serves any
number of concurrent requests.
"""

import os
import uuid
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import BinaryIO, List, Optional, Sequence

from werkzeug.utils import secure_filename

from ..config.core import (
    DEFAULT_CHART_TITLE_TEMPLATE,
    DEFAULT_MAX_UPLOAD_BYTES,
    DEFAULT_PAGE_TITLE,
    DisplayDefaults,
    Settings,
)
from ..config.forms import FormOptions
from ..errors import LinePlotError, StartupError, UploadError
from ..logging import LogContext, log_exception
from ..logging.error_codes import ErrorCode
from ..pipeline import build_chart
from ..plots import ChartRenderer, HtmlPageRenderer, assemble_page, default_chart_title, write_page
from ..utils import create_unique_file, ensure_dir, remove_file
from ..validation import resolve_display_config
from ..logging.loggers import web_logger as logger

COPY_CHUNK_BYTES = 64 * 1024
OUTPUT_URL_PREFIX = '/output'


class SessionState(str, Enum):
    """Lifecycle states of one upload request."""
    RECEIVED = 'received'
    STAGED = 'staged'
    PROCESSED = 'processed'
    CLEANED = 'cleaned'
    FAILED = 'failed'

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class UploadPart:
    """One uploaded file: its client-side name, content stream and declared size."""
    filename: str
    stream: BinaryIO
    size: int


@dataclass(frozen=True)
class UploadJob:
    """One upload request."""
    parts: Sequence[UploadPart]
    options: FormOptions
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])


@dataclass(frozen=True)
class StagedFile:
    original_name: str
    path: Path


@dataclass(frozen=True)
class UploadResult:
    """Outcome of a successful upload."""
    request_id: str
    public_path: str
    output_path: Path


def display_name(filename: str, index: int) -> str:
    """Client file name reduced to a safe base name."""
    return secure_filename(os.path.basename(filename or '')) or f"upload-{index + 1}"


class UploadSessionManager:
    """
    Stage uploads, plot them and hand back the public path of the page.

    Args:
        output_dir: Directory receiving generated pages (served read-only)
        temp_dir: Directory receiving staged uploads
        max_upload_bytes: Cap on the summed size of one request's files
        renderer: Chart renderer (HtmlPageRenderer if None)
        page_title: Title of generated pages
        chart_title_template: Chart title template ('{name}' is the file name)
        defaults: Display defaults; width and height are fixed to these
    """

    def __init__(
        self,
        output_dir: Path,
        temp_dir: Path,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        renderer: Optional[ChartRenderer] = None,
        page_title: str = DEFAULT_PAGE_TITLE,
        chart_title_template: str = DEFAULT_CHART_TITLE_TEMPLATE,
        defaults: Optional[DisplayDefaults] = None,
    ):
        self.output_dir = Path(output_dir)
        self.temp_dir = Path(temp_dir)
        self.max_upload_bytes = max_upload_bytes
        self.renderer = renderer or HtmlPageRenderer()
        self.page_title = page_title
        self.chart_title_template = chart_title_template
        self.defaults = defaults or DisplayDefaults()

    @classmethod
    def from_settings(cls, settings: Settings, renderer: Optional[ChartRenderer] = None) -> 'UploadSessionManager':
        return cls(
            output_dir=settings.output_dir,
            temp_dir=settings.temp_dir,
            max_upload_bytes=settings.max_upload_bytes,
            renderer=renderer,
            page_title=settings.page_title,
            chart_title_template=settings.chart_title_template,
            defaults=settings.display,
        )

    def ensure_directories(self) -> None:
        """
        Create the output and temp directories.

        Raises:
            StartupError: If either directory cannot be created
        """
        for directory in (self.output_dir, self.temp_dir):
            try:
                ensure_dir(directory)
            except OSError as e:
                raise StartupError(f"Failed to create directory {directory}: {e.strerror or e}") from e

    def handle(self, job: UploadJob) -> UploadResult:
        """
        Run one upload request through its whole lifecycle.

        Raises:
            UploadError: If the upload is empty, too large or cannot be staged
            LoadError, ValidationError, AssemblyError: If plotting fails;
                the message names the offending upload
        """
        with LogContext(phase="upload", request_id=job.request_id):
            self._transition(SessionState.RECEIVED, files=len(job.parts))
            staged: List[StagedFile] = []
            try:
                self._check_size(job.parts)
                staged = self._stage(job.parts)
                self._transition(SessionState.STAGED)
                output_path = self._process(staged, job.options)
                self._transition(SessionState.PROCESSED)
            except LinePlotError as e:
                log_exception(logger, f"Upload failed: {e}", exc=e, include_traceback=False)
                self._transition(SessionState.FAILED)
                raise
            except BaseException as e:
                log_exception(logger, "Upload failed unexpectedly", exc=e, error_code=ErrorCode.INTERNAL_ERROR)
                self._transition(SessionState.FAILED)
                raise
            finally:
                self._cleanup(staged)

            self._transition(SessionState.CLEANED)
            return UploadResult(
                request_id=job.request_id,
                public_path=f"{OUTPUT_URL_PREFIX}/{output_path.name}",
                output_path=output_path,
            )

    def _transition(self, state: SessionState, **details) -> None:
        suffix = ''.join(f" {key}={value}" for key, value in details.items())
        logger.info(f"Upload {state}{suffix}")

    def _check_size(self, parts: Sequence[UploadPart]) -> None:
        if not parts:
            raise UploadError("No file was uploaded", ErrorCode.NO_UPLOAD)
        total = sum(max(part.size, 0) for part in parts)
        if total > self.max_upload_bytes:
            raise UploadError(
                f"File size exceeds the maximum limit of {self.max_upload_bytes // (1024 * 1024)}MB",
                ErrorCode.PAYLOAD_TOO_LARGE,
            )

    def _stage(self, parts: Sequence[UploadPart]) -> List[StagedFile]:
        """Copy every part into its own temp file; all or nothing."""
        staged: List[StagedFile] = []
        written = 0
        try:
            for index, part in enumerate(parts):
                name = display_name(part.filename, index)
                try:
                    fd, path = create_unique_file(self.temp_dir, 'uploaded-', '.csv')
                except OSError as e:
                    raise UploadError(
                        f"Failed to create the destination file for storing {name}",
                        ErrorCode.STAGE_FAILED,
                    ) from e
                staged.append(StagedFile(original_name=name, path=path))
                try:
                    with os.fdopen(fd, 'wb') as dst:
                        while True:
                            chunk = part.stream.read(COPY_CHUNK_BYTES)
                            if not chunk:
                                break
                            written += len(chunk)
                            # Declared sizes can understate the real payload
                            if written > self.max_upload_bytes:
                                raise UploadError(
                                    f"File size exceeds the maximum limit of "
                                    f"{self.max_upload_bytes // (1024 * 1024)}MB",
                                    ErrorCode.PAYLOAD_TOO_LARGE,
                                )
                            dst.write(chunk)
                except OSError as e:
                    raise UploadError(
                        f"Failed to upload file {name}: {e.strerror or e}",
                        ErrorCode.STAGE_FAILED,
                    ) from e
        except UploadError:
            self._cleanup(staged)
            raise
        return staged

    def _process(self, staged: Sequence[StagedFile], options: FormOptions) -> Path:
        specs = []
        for item in staged:
            with LogContext(phase="plot", source=item.original_name):
                display = resolve_display_config(
                    title=default_chart_title(item.original_name, self.chart_title_template),
                    x_title=options.x_title,
                    y_title=options.y_title,
                    smooth=options.smooth,
                    defaults=self.defaults,
                )
                try:
                    specs.append(build_chart(item.path, display, c1x=options.c1x, r1h=options.r1h))
                except LinePlotError as e:
                    raise type(e)(f"Failed to plot {item.original_name}: {e}", e.error_code) from e

        page = assemble_page(specs, page_title=self.page_title)
        try:
            fd, output_path = create_unique_file(self.output_dir, 'chart-', '.html')
        except OSError as e:
            raise UploadError(
                "Failed to create the destination file for holding charts",
                ErrorCode.IO_WRITE_ERROR,
            ) from e
        os.close(fd)
        try:
            write_page(page, output_path, self.renderer)
        except BaseException:
            remove_file(output_path)
            raise
        return output_path

    def _cleanup(self, staged: Sequence[StagedFile]) -> None:
        removed = sum(1 for item in staged if remove_file(item.path))
        if removed:
            logger.debug(f"Removed {removed} staged file(s)")
