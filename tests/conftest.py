"""
Pytest configuration and fixtures for lineplot tests.
"""

import sys
from pathlib import Path
from typing import List

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from lineplot.config import Settings, clear_config_cache
from lineplot.config.core import DisplayDefaults
from lineplot.logging import reset_context, shutdown_logging
from lineplot.plots import ChartRenderer


class StubRenderer(ChartRenderer):
    """Renderer recording the pages it is given instead of drawing them."""

    def __init__(self, fail: bool = False):
        self.pages = []
        self.fail = fail

    def render_page(self, page) -> str:
        if self.fail:
            raise RuntimeError("renderer exploded")
        self.pages.append(page)
        titles = "".join(f"<h2>{chart.title}</h2>" for chart in page.charts)
        return f"<html><title>{page.title}</title>{titles}</html>"


@pytest.fixture
def project_root_path():
    """Return the project root path."""
    return project_root


@pytest.fixture(autouse=True)
def clean_state():
    """Reset logging context and settings cache around every test."""
    reset_context()
    clear_config_cache()
    yield
    reset_context()
    clear_config_cache()
    shutdown_logging()


@pytest.fixture
def write_csv(tmp_path):
    """Factory writing CSV text (or rows) to a file under tmp_path."""
    def _write(content, name: str = 'data.csv') -> Path:
        path = tmp_path / name
        if isinstance(content, str):
            text = content
        else:
            text = "".join(",".join(row) + "\n" for row in content)
        path.write_text(text, encoding='utf-8')
        return path
    return _write


@pytest.fixture
def example_rows() -> List[List[str]]:
    """Rows with an x-axis column and a heading row."""
    return [
        ["X", "S1", "S2"],
        ["1", "100", "200"],
        ["2", "210", "210"],
        ["3", "89", "300"],
    ]


@pytest.fixture
def stub_renderer():
    return StubRenderer()


@pytest.fixture
def web_settings(tmp_path, project_root_path):
    """Settings pointing output and temp directories into tmp_path."""
    return Settings(
        display=DisplayDefaults(),
        output_dir=tmp_path / 'output',
        temp_dir=tmp_path / 'tmp',
        static_dir=project_root_path / 'lineplot' / 'web' / 'static',
    )


@pytest.fixture
def failing_renderer():
    return StubRenderer(fail=True)
