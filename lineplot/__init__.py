"""
lineplot - CSV to line chart pages

This package turns CSV files into line charts and assembles them into a single
self-contained HTML page. A web service accepts uploads and does the same.

Main exports:
- data: CSV loading and axis/series extraction
- validation: series validation and display defaults
- plots: chart specifications, page assembly and rendering
- pipeline: file-level orchestration for the command line and web service
"""

__version__ = "0.1.0"

from .errors import (
    LinePlotError,
    LoadError,
    ValidationError,
    AssemblyError,
    UploadError,
    StartupError,
)

from .models import AxisSeriesSet, DisplayConfig

from .data import load_record_matrix, extract_axis_series, load_axis_series

from .validation import validate_axis_series, resolve_display_config

from .plots import (
    ChartSpec,
    PageArtifact,
    ChartRenderer,
    HtmlPageRenderer,
    build_chart_spec,
    assemble_page,
    resolve_titles,
    write_page,
)

from .pipeline import PlotOptions, build_chart, plot_files

__all__ = [
    # Errors
    'LinePlotError',
    'LoadError',
    'ValidationError',
    'AssemblyError',
    'UploadError',
    'StartupError',
    # Data model
    'AxisSeriesSet',
    'DisplayConfig',
    # Data ingestion
    'load_record_matrix',
    'extract_axis_series',
    'load_axis_series',
    # Validation
    'validate_axis_series',
    'resolve_display_config',
    # Plots
    'ChartSpec',
    'PageArtifact',
    'ChartRenderer',
    'HtmlPageRenderer',
    'build_chart_spec',
    'assemble_page',
    'resolve_titles',
    'write_page',
    # Pipeline
    'PlotOptions',
    'build_chart',
    'plot_files',
]
