"""
Axis/series extraction.

Splits a record matrix into an optional x-axis column, an optional series-name
row and series-major values. Cell values are passed through unchanged; numeric
interpretation is left to the renderer.
"""

from ..models import AxisSeriesSet, RecordMatrix
from .loader import CsvSource, load_record_matrix
from ..logging.loggers import data_logger as logger


def extract_axis_series(matrix: RecordMatrix, c1x: bool = False, r1h: bool = False) -> AxisSeriesSet:
    """
    Extract axis, names and series from a record matrix.

    Args:
        matrix: Rectangular record matrix
        c1x: Use the first column as x-axis coordinates
        r1h: Use the first row as series names

    Returns:
        Raw AxisSeriesSet. ``x_axis`` is empty unless ``c1x``,
        ``series_names`` is empty unless ``r1h``. With ``r1h`` on a
        header-only matrix every series is empty; validation rejects that.

    Example:
        >>> extract_axis_series([['X', 'S1'], ['1', '100']], c1x=True, r1h=True)
        AxisSeriesSet(x_axis=('1',), series_names=('S1',), series_values=(('100',),))
    """
    col_offset = 1 if c1x else 0
    row_offset = 1 if r1h else 0

    data_rows = matrix[row_offset:]
    column_count = len(matrix[0]) if matrix else 0

    series_names = tuple(matrix[0][col_offset:]) if r1h and matrix else ()
    x_axis = tuple(row[0] for row in data_rows) if c1x else ()

    # Transpose row-major records into one tuple per data column
    series_values = tuple(
        tuple(row[col_offset + j] for row in data_rows)
        for j in range(column_count - col_offset)
    )

    logger.debug(
        f"Extracted {len(series_values)} series x {len(data_rows)} items "
        f"(c1x={c1x}, r1h={r1h})"
    )
    return AxisSeriesSet(x_axis=x_axis, series_names=series_names, series_values=series_values)


def load_axis_series(source: CsvSource, c1x: bool = False, r1h: bool = False) -> AxisSeriesSet:
    """Load a CSV source and extract its raw axis/series set."""
    return extract_axis_series(load_record_matrix(source), c1x=c1x, r1h=r1h)
