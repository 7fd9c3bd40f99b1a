"""
Series validation and defaulting.

Checks run in a fixed order and the first violation aborts with a
``ValidationError``; absent names and x-axis values are synthesized in between.
"""

from ..errors import ValidationError
from ..logging.error_codes import ErrorCode
from ..models import AxisSeriesSet
from ..logging.loggers import validation_logger as logger


def default_series_names(count: int) -> tuple:
    """Synthesize 'series1' .. 'seriesN'."""
    return tuple(f"series{i + 1}" for i in range(count))


def default_x_axis(count: int) -> tuple:
    """Synthesize the 1-based index sequence 1 .. count."""
    return tuple(range(1, count + 1))


def validate_axis_series(raw: AxisSeriesSet) -> AxisSeriesSet:
    """
    Validate a raw axis/series set and fill in absent names and x-axis.

    Order of operations:
        1. at least one series, holding at least one item
        2. default series names when absent
        3. equal series lengths
        4. default x-axis when absent
        5. explicit x-axis length equals series length
        6. series name count equals series count

    Args:
        raw: Axis/series set as produced by the extractor

    Returns:
        New, fully populated AxisSeriesSet

    Raises:
        ValidationError: On the first violated check
    """
    series_values = raw.series_values
    if not series_values:
        raise ValidationError("At least one series should be defined", ErrorCode.NO_SERIES)

    series_names = raw.series_names
    if not series_names:
        series_names = default_series_names(len(series_values))

    count = len(series_values[0])
    for index, values in enumerate(series_values):
        if len(values) != count:
            raise ValidationError(
                f"The number of data items in each series should be the same: "
                f"series 1 has {count}, series {index + 1} has {len(values)}",
                ErrorCode.SERIES_LENGTH_MISMATCH,
            )

    # A header row with nothing under it leaves every series empty
    if count == 0:
        raise ValidationError(
            "At least one series should be defined with one or more data rows",
            ErrorCode.NO_SERIES,
        )

    x_axis = raw.x_axis
    if not x_axis:
        x_axis = default_x_axis(count)
    elif len(x_axis) != count:
        raise ValidationError(
            f"The number of x-axis items ({len(x_axis)}) should be the same as "
            f"the number of data items in each series ({count})",
            ErrorCode.AXIS_LENGTH_MISMATCH,
        )

    if len(series_names) != len(series_values):
        raise ValidationError(
            f"The number of series names ({len(series_names)}) must be the same as "
            f"the number of series ({len(series_values)})",
            ErrorCode.NAME_COUNT_MISMATCH,
        )

    logger.debug(f"Validated {len(series_values)} series x {count} items")
    return AxisSeriesSet(
        x_axis=tuple(x_axis),
        series_names=tuple(series_names),
        series_values=tuple(tuple(values) for values in series_values),
    )
