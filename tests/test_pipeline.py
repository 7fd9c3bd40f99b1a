"""
End-to-end tests for the file-level plotting pipeline.
"""

# Standard library imports
import io
import sys
from pathlib import Path

# Third-party imports
import pytest

# Local imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from lineplot.errors import LoadError, ValidationError
from lineplot.logging.error_codes import ErrorCode
from lineplot.pipeline import PlotOptions, build_chart, plot_files
from lineplot.validation import resolve_display_config


class TestBuildChart:
    """Test build_chart on single files."""

    @pytest.mark.integration
    def test_heading_and_axis_column(self, write_csv, example_rows):
        path = write_csv(example_rows)
        spec = build_chart(path, resolve_display_config("example 1"), c1x=True, r1h=True)
        assert spec.x_axis == ("1", "2", "3")
        assert [s.name for s in spec.series] == ["S1", "S2"]
        assert spec.series[0].values == ("100", "210", "89")
        assert spec.series[1].values == ("200", "210", "300")
        assert all(s.mark_lines == () for s in spec.series)

    @pytest.mark.integration
    def test_single_column_without_flags(self, write_csv):
        path = write_csv("100\n210\n89\n")
        spec = build_chart(path, resolve_display_config())
        assert spec.x_axis == (1, 2, 3)
        assert spec.series[0].name == "series1"
        assert spec.series[0].values == ("100", "210", "89")
        assert len(spec.series[0].mark_lines) == 3

    @pytest.mark.integration
    def test_stream_source(self):
        spec = build_chart(io.StringIO("a,b\n1,2\n"), resolve_display_config(), r1h=True)
        assert [s.name for s in spec.series] == ["a", "b"]

    @pytest.mark.integration
    def test_missing_file(self, tmp_path):
        with pytest.raises(LoadError) as exc_info:
            build_chart(tmp_path / 'absent.csv', resolve_display_config())
        assert exc_info.value.error_code == ErrorCode.DATA_LOAD_FAILED


class TestPlotFiles:
    """Test plot_files."""

    @pytest.mark.integration
    def test_one_chart_per_file(self, write_csv, example_rows, tmp_path, stub_renderer):
        cpu = write_csv(example_rows, 'cpu.csv')
        mem = write_csv(example_rows, 'mem.csv')
        out = tmp_path / 'both.html'

        plot_files([cpu, mem], out, PlotOptions(c1x=True, r1h=True), renderer=stub_renderer)

        page = stub_renderer.pages[0]
        assert page.title == "Line Charts"
        assert [c.title for c in page.charts] == ["chart for cpu.csv", "chart for mem.csv"]
        assert out.exists()

    @pytest.mark.integration
    def test_explicit_titles_and_dimensions(self, write_csv, tmp_path, stub_renderer):
        path = write_csv("1\n2\n")
        options = PlotOptions(x_title="t", y_title="v", width=1000, height=0, smooth=True)
        plot_files([path], tmp_path / 'out.html', options, titles=["mine"], renderer=stub_renderer)

        chart = stub_renderer.pages[0].charts[0]
        assert chart.title == "mine"
        assert (chart.x_title, chart.y_title) == ("t", "v")
        assert (chart.width, chart.height) == (1000, 500)
        assert chart.series[0].smooth is True

    @pytest.mark.integration
    def test_title_count_mismatch(self, write_csv, tmp_path, stub_renderer):
        a = write_csv("1\n", 'a.csv')
        b = write_csv("2\n", 'b.csv')
        with pytest.raises(ValidationError) as exc_info:
            plot_files([a, b], tmp_path / 'out.html', PlotOptions(), titles=["one"], renderer=stub_renderer)
        assert exc_info.value.error_code == ErrorCode.TITLE_COUNT_MISMATCH
        assert stub_renderer.pages == []

    @pytest.mark.integration
    def test_failure_writes_nothing(self, write_csv, tmp_path, stub_renderer):
        good = write_csv("1\n2\n", 'good.csv')
        bad = write_csv("a,b\n1\n", 'bad.csv')
        out = tmp_path / 'out.html'
        with pytest.raises(LoadError) as exc_info:
            plot_files([good, bad], out, PlotOptions(), renderer=stub_renderer)
        assert exc_info.value.error_code == ErrorCode.DATA_NOT_RECTANGULAR
        assert not out.exists()

    @pytest.mark.integration
    def test_negative_dimension(self, write_csv, tmp_path, stub_renderer):
        with pytest.raises(ValidationError) as exc_info:
            plot_files([write_csv("1\n")], tmp_path / 'out.html', PlotOptions(width=-1), renderer=stub_renderer)
        assert exc_info.value.error_code == ErrorCode.INVALID_DIMENSION

    @pytest.mark.integration
    def test_real_renderer(self, write_csv, example_rows, tmp_path):
        """Full pipeline through the matplotlib renderer."""
        out = tmp_path / 'lines.html'
        plot_files([write_csv(example_rows)], out, PlotOptions(c1x=True, r1h=True, width=600, height=300))
        html = out.read_text(encoding='utf-8')
        assert html.count('data:image/png;base64,') == 1
        assert 'chart for data.csv' in html
