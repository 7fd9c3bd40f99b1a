"""
Test logging configuration, context and structured output.
"""

# Standard library imports
import json
import logging
import sys
import threading
from pathlib import Path

# Third-party imports
import pytest

# Local imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from lineplot.errors import LoadError
from lineplot.logging import (
    ConsoleFormatter,
    ErrorCode,
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_context_value,
    get_logger,
    log_exception,
    log_with_context,
    shutdown_logging,
)


class RecordCollector(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def collector():
    handler = RecordCollector()
    root = logging.getLogger('lineplot')
    previous = root.level
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    yield handler
    root.removeHandler(handler)
    root.setLevel(previous)


class TestLogContext:
    """Test LogContext."""

    @pytest.mark.unit
    def test_sets_and_restores(self):
        with LogContext(phase="upload", request_id="abc"):
            assert get_context_value('phase') == "upload"
            with LogContext(phase="plot", source="a.csv"):
                assert get_context_value('phase') == "plot"
                assert get_context_value('request_id') == "abc"
            assert get_context_value('source') is None
        assert get_context_value('phase') is None

    @pytest.mark.unit
    def test_restored_after_exception(self):
        with pytest.raises(RuntimeError):
            with LogContext(phase="plot"):
                raise RuntimeError("boom")
        assert get_context_value('phase') is None

    @pytest.mark.unit
    def test_threads_do_not_share_context(self):
        seen = {}
        ready = threading.Event()

        def worker():
            ready.wait()
            seen['phase'] = get_context_value('phase')

        thread = threading.Thread(target=worker)
        thread.start()
        with LogContext(phase="upload"):
            ready.set()
            thread.join()
        assert seen['phase'] is None


class TestLogHelpers:
    """Test log_with_context and log_exception."""

    @pytest.mark.unit
    def test_log_with_context_extra_fields(self, collector):
        log_with_context(get_logger('test'), "WARNING", "careful",
                         error_code=ErrorCode.NO_SERIES, rows=3)
        record = collector.records[-1]
        assert record.levelno == logging.WARNING
        assert record.extra_fields == {'rows': 3, 'error_code': 'VAL_010', 'error_category': 'validation'}

    @pytest.mark.unit
    def test_log_exception_uses_error_code_of_exception(self, collector):
        error = LoadError("Cannot read data file x.csv")
        log_exception(get_logger('test'), "load failed", exc=error, include_traceback=False)
        record = collector.records[-1]
        assert record.levelno == logging.ERROR
        assert record.extra_fields['error_code'] == 'DATA_001'
        assert record.extra_fields['exception_type'] == 'LoadError'

    @pytest.mark.unit
    def test_invalid_level(self):
        with pytest.raises(ValueError):
            configure_logging(level="LOUD", console=False)


class TestFormatters:
    """Test ConsoleFormatter and StructuredFormatter."""

    def _record(self, message="hello"):
        record = logging.LogRecord('lineplot.web', logging.INFO, __file__, 1, message, (), None)
        record.extra_fields = {'error_code': 'WEB_001'}
        return record

    @pytest.mark.unit
    def test_console_format(self):
        with LogContext(phase="upload", request_id="r1"):
            line = ConsoleFormatter(use_colors=False).format(self._record())
        assert "| INFO     | web | hello [phase=upload, request_id=r1] (code=WEB_001)" in line

    @pytest.mark.unit
    def test_structured_format(self):
        with LogContext(phase="plot", source="a.csv"):
            data = json.loads(StructuredFormatter().format(self._record()))
        assert data['message'] == "hello"
        assert data['logger'] == "lineplot.web"
        assert data['context'] == {'phase': 'plot', 'source': 'a.csv'}
        assert data['extra'] == {'error_code': 'WEB_001'}


class TestConfigureLogging:
    """Test configure_logging."""

    @pytest.mark.unit
    def test_file_handler_writes_json(self, tmp_path):
        try:
            configure_logging(level="INFO", log_dir=tmp_path, console=False, file=True)
            get_logger('test').info("to file")
        finally:
            shutdown_logging()
        lines = [json.loads(l) for f in tmp_path.glob('lineplot_*.log') for l in f.read_text().splitlines()]
        assert any(entry['message'] == "to file" for entry in lines)

    @pytest.mark.unit
    def test_reconfigure_replaces_handlers(self):
        try:
            root = configure_logging(console=True, file=False)
            count = len(root.handlers)
            configure_logging(console=True, file=False)
            assert len(root.handlers) == count
        finally:
            shutdown_logging()


class TestNamedLoggers:
    """Test that pipeline modules log through the shared named loggers."""

    @pytest.mark.unit
    def test_modules_share_named_loggers(self):
        import lineplot.data.loader
        import lineplot.pipeline
        import lineplot.plots.page
        import lineplot.validation.series
        import lineplot.web.session
        from lineplot.logging import (
            data_logger,
            pipeline_logger,
            plot_logger,
            validation_logger,
            web_logger,
        )

        assert lineplot.data.loader.logger is data_logger
        assert lineplot.validation.series.logger is validation_logger
        assert lineplot.plots.page.logger is plot_logger
        assert lineplot.pipeline.logger is pipeline_logger
        assert lineplot.web.session.logger is web_logger
        assert web_logger.name == 'lineplot.web'
