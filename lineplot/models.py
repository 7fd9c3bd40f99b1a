"""
Data model shared by the lineplot pipeline.

Contains:
- RecordMatrix type alias
- AxisSeriesSet: x-axis, series names and series-major values of one input
- DisplayConfig: per-chart display parameters
"""

from dataclasses import dataclass
from typing import Any, List, Tuple

# Rows of text cells, as read from one delimited-text source
RecordMatrix = List[List[str]]

# A cell value stays opaque: raw text from the file or a synthesized int
CellValue = Any


@dataclass(frozen=True)
class AxisSeriesSet:
    """
    Axis/series data of one input file.

    ``series_values[j][i]`` is item ``i`` of series ``j``. Straight out of the
    extractor, ``x_axis`` and ``series_names`` may be empty (absent); after
    validation they are always populated and consistent.
    """
    x_axis: Tuple[CellValue, ...] = ()
    series_names: Tuple[str, ...] = ()
    series_values: Tuple[Tuple[CellValue, ...], ...] = ()

    @property
    def series_count(self) -> int:
        return len(self.series_values)

    @property
    def item_count(self) -> int:
        return len(self.series_values[0]) if self.series_values else 0


@dataclass(frozen=True)
class DisplayConfig:
    """Display parameters of a single chart."""
    title: str = ""
    x_title: str = ""
    y_title: str = ""
    width: int = 0
    height: int = 0
    smooth: bool = False


__all__ = [
    'RecordMatrix',
    'CellValue',
    'AxisSeriesSet',
    'DisplayConfig',
]
