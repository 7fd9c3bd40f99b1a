"""
Data ingestion for lineplot.

Loads CSV sources into record matrices and reshapes them into axis/series sets.
"""

from .loader import CsvSource, load_record_matrix
from .extraction import extract_axis_series, load_axis_series

__all__ = [
    'CsvSource',
    'load_record_matrix',
    'extract_axis_series',
    'load_axis_series',
]
