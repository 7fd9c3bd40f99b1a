"""
Chart rendering.

``ChartRenderer`` is the seam between the pipeline and whatever draws the
charts. ``HtmlPageRenderer`` draws each chart with matplotlib and embeds the
images in one self-contained HTML page.
"""

# Standard library imports
import base64
import html
import io
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Sequence

# Third-party imports
import numpy as np
import pandas as pd
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

if TYPE_CHECKING:
    from .page import PageArtifact
    from .spec import ChartSpec, SeriesSpec

DPI = 100

# Upper bound on labelled x ticks; longer axes are thinned
MAX_X_TICKS = 40

# Points inserted between two samples of a smoothed series
SMOOTH_STEPS = 8

MARK_LINE_STYLES = {
    'min': {'linestyle': ':', 'color': '#2E86AB'},
    'average': {'linestyle': '--', 'color': '#6C757D'},
    'max': {'linestyle': ':', 'color': '#E63946'},
}

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ margin: 0; padding: 16px; font-family: sans-serif; }}
.chart {{ margin-bottom: 24px; }}
.chart img {{ display: block; max-width: 100%; height: auto; }}
</style>
</head>
<body>
{charts}
</body>
</html>
"""

CHART_TEMPLATE = """<div class="chart" style="width:{width}; height:{height};">
<img alt="{title}" src="data:image/png;base64,{data}">
</div>"""


class ChartRenderer(ABC):
    """Interface of a renderer producing one page document from a PageArtifact."""

    @abstractmethod
    def render_page(self, page: 'PageArtifact') -> str:
        """Return the complete page document."""


def to_numeric(values: Sequence) -> np.ndarray:
    """Coerce raw cell values to floats; unparsable cells become NaN."""
    series = pd.Series(list(values), dtype=object)
    if series.map(lambda v: isinstance(v, str)).any():
        series = series.map(lambda v: v.strip() if isinstance(v, str) else v)
    return pd.to_numeric(series, errors='coerce').to_numpy(dtype=float)


def smooth_curve(x: np.ndarray, y: np.ndarray, steps: int = SMOOTH_STEPS):
    """
    Interpolate a Catmull-Rom curve through the points.

    The curve passes through every sample. Series with gaps (NaN) or fewer
    than three points are returned unchanged.
    """
    if len(y) < 3 or not np.isfinite(y).all():
        return x, y

    px = np.concatenate(([2 * x[0] - x[1]], x, [2 * x[-1] - x[-2]]))
    py = np.concatenate(([2 * y[0] - y[1]], y, [2 * y[-1] - y[-2]]))
    t = np.linspace(0.0, 1.0, steps, endpoint=False)[:, None]
    t2, t3 = t * t, t * t * t

    def segment(p):
        p0, p1, p2, p3 = p[:-3], p[1:-2], p[2:-1], p[3:]
        return 0.5 * (
            2 * p1
            + (p2 - p0) * t
            + (2 * p0 - 5 * p1 + 4 * p2 - p3) * t2
            + (3 * p1 - p0 - 3 * p2 + p3) * t3
        )

    sx = np.append(segment(px).T.ravel(), x[-1])
    sy = np.append(segment(py).T.ravel(), y[-1])
    return sx, sy


def _format_value(value: float) -> str:
    return f"{value:g}"


class HtmlPageRenderer(ChartRenderer):
    """
    Render charts as PNG images embedded in a single HTML page.

    Figures are created without pyplot, so concurrent requests never share
    matplotlib state.
    """

    def __init__(self, dpi: int = DPI):
        self.dpi = dpi

    def render_chart(self, chart: 'ChartSpec') -> bytes:
        """Draw one chart and return it as PNG bytes."""
        fig = Figure(figsize=(chart.width / self.dpi, chart.height / self.dpi), dpi=self.dpi)
        FigureCanvasAgg(fig)
        ax = fig.add_subplot(111)

        positions = np.arange(len(chart.x_axis), dtype=float)
        for series in chart.series:
            self._draw_series(ax, positions, series)

        labels = [str(v) for v in chart.x_axis]
        step = max(1, int(np.ceil(len(labels) / MAX_X_TICKS)))
        ax.set_xticks(positions[::step])
        ax.set_xticklabels(labels[::step], rotation=45 if step > 1 else 0)

        ax.set_title(chart.title, fontsize=14, fontweight='bold')
        ax.set_xlabel(chart.x_title, fontsize=12)
        ax.set_ylabel(chart.y_title, fontsize=12)
        ax.grid(True, alpha=0.3)
        ax.legend(loc='upper right')
        fig.tight_layout()

        buf = io.BytesIO()
        fig.savefig(buf, format='png')
        return buf.getvalue()

    def _draw_series(self, ax, positions: np.ndarray, series: 'SeriesSpec') -> None:
        y = to_numeric(series.values)
        marker = 'o' if series.show_symbol else None

        if series.smooth:
            sx, sy = smooth_curve(positions, y)
            (line,) = ax.plot(sx, sy, linewidth=1.5, label=series.name)
            if marker:
                ax.plot(positions, y, linestyle='none', marker=marker, color=line.get_color())
        else:
            (line,) = ax.plot(positions, y, linewidth=1.5, marker=marker, label=series.name)

        if series.show_label:
            for px, py in zip(positions, y):
                if np.isfinite(py):
                    ax.annotate(
                        _format_value(py), (px, py),
                        textcoords='offset points', xytext=(0, 6),
                        ha='center', fontsize=8,
                    )

        finite = y[np.isfinite(y)]
        if finite.size == 0:
            return
        summary = {'min': finite.min(), 'average': finite.mean(), 'max': finite.max()}
        for mark in series.mark_lines:
            value = summary.get(mark.type)
            if value is None:
                continue
            ax.axhline(
                value, linewidth=1,
                label=f"{mark.name}: {_format_value(value)}",
                **MARK_LINE_STYLES.get(mark.type, {}),
            )

    def render_page(self, page: 'PageArtifact') -> str:
        charts = []
        for chart in page.charts:
            width, height = chart.size
            charts.append(CHART_TEMPLATE.format(
                width=width,
                height=height,
                title=html.escape(chart.title),
                data=base64.b64encode(self.render_chart(chart)).decode('ascii'),
            ))
        return PAGE_TEMPLATE.format(title=html.escape(page.title), charts="\n".join(charts))
