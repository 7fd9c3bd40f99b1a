"""
Record matrix loader.

Reads comma-delimited text into a rectangular matrix of string cells. Quoting
and escaping follow the conventions of the standard ``csv`` module.
"""

import csv
from pathlib import Path
from typing import IO, Union

from ..errors import LoadError
from ..logging.error_codes import ErrorCode
from ..models import RecordMatrix
from ..logging.loggers import data_logger as logger

CsvSource = Union[str, Path, IO[str]]


def _read_records(stream: IO[str], name: str) -> RecordMatrix:
    reader = csv.reader(stream, skipinitialspace=True)
    try:
        # Blank lines carry no record
        return [row for row in reader if row]
    except csv.Error as e:
        raise LoadError(
            f"Malformed CSV in {name} at line {reader.line_num}: {e}",
            ErrorCode.DATA_PARSE_ERROR,
        ) from e
    except UnicodeDecodeError as e:
        raise LoadError(f"{name} is not valid UTF-8 text", ErrorCode.DATA_PARSE_ERROR) from e


def _source_name(source: CsvSource) -> str:
    if isinstance(source, (str, Path)):
        return Path(source).name
    return getattr(source, 'name', '<stream>')


def load_record_matrix(source: CsvSource) -> RecordMatrix:
    """
    Load a CSV source into a record matrix.

    Args:
        source: Path to a CSV file, or an open text stream (left open)

    Returns:
        List of rows, every row holding the same number of cells

    Raises:
        LoadError: If the source cannot be opened or parsed, holds no records,
            or its rows have differing column counts
    """
    name = _source_name(source)

    if isinstance(source, (str, Path)):
        try:
            with open(source, 'r', newline='', encoding='utf-8-sig') as f:
                records = _read_records(f, name)
        except OSError as e:
            raise LoadError(f"Cannot read data file {name}: {e.strerror or e}") from e
    else:
        records = _read_records(source, name)

    if not records:
        raise LoadError(f"No records found in {name}", ErrorCode.DATA_EMPTY)

    width = len(records[0])
    for line_no, row in enumerate(records[1:], start=2):
        if len(row) != width:
            raise LoadError(
                f"Record {line_no} of {name} has {len(row)} fields, expected {width}",
                ErrorCode.DATA_NOT_RECTANGULAR,
            )

    logger.debug(f"Loaded {len(records)} records x {width} columns from {name}")
    return records
