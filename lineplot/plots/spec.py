"""
Chart specification builder.

Turns one validated axis/series set and its display parameters into a
renderer-agnostic ``ChartSpec``.
"""

from dataclasses import dataclass
from typing import Tuple

from ..models import AxisSeriesSet, CellValue, DisplayConfig


@dataclass(frozen=True)
class MarkLine:
    """A horizontal reference line computed by the renderer (min/average/max)."""
    name: str
    type: str


# Reference lines attached to single-series charts
SUMMARY_MARK_LINES: Tuple[MarkLine, ...] = (
    MarkLine(name="Minimum", type="min"),
    MarkLine(name="Average", type="average"),
    MarkLine(name="Maximum", type="max"),
)


@dataclass(frozen=True)
class SeriesSpec:
    """One line of a chart."""
    name: str
    values: Tuple[CellValue, ...]
    show_label: bool = True
    show_symbol: bool = True
    smooth: bool = False
    mark_lines: Tuple[MarkLine, ...] = ()


@dataclass(frozen=True)
class ChartSpec:
    """Everything a renderer needs to draw one line chart."""
    title: str
    x_title: str
    y_title: str
    width: int
    height: int
    x_axis: Tuple[CellValue, ...]
    series: Tuple[SeriesSpec, ...]
    tooltip_trigger: str = "axis"

    @property
    def size(self) -> Tuple[str, str]:
        """Width and height as CSS pixel strings."""
        return f"{self.width}px", f"{self.height}px"


def build_chart_spec(series_set: AxisSeriesSet, display: DisplayConfig) -> ChartSpec:
    """
    Build a chart specification.

    Every series gets point labels and point markers. A chart with exactly one
    series also gets minimum/average/maximum reference lines. ``smooth``
    applies to all series of the chart.

    Args:
        series_set: Validated axis/series set
        display: Normalized display parameters

    Returns:
        ChartSpec; equal inputs always give equal specs
    """
    mark_lines = SUMMARY_MARK_LINES if series_set.series_count == 1 else ()
    series = tuple(
        SeriesSpec(
            name=name,
            values=tuple(values),
            show_label=True,
            show_symbol=True,
            smooth=display.smooth,
            mark_lines=mark_lines,
        )
        for name, values in zip(series_set.series_names, series_set.series_values)
    )
    return ChartSpec(
        title=display.title,
        x_title=display.x_title,
        y_title=display.y_title,
        width=display.width,
        height=display.height,
        x_axis=tuple(series_set.x_axis),
        series=series,
    )
