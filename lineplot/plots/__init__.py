"""
Chart specification, page assembly and rendering for lineplot.
"""

from .spec import (
    MarkLine,
    SeriesSpec,
    ChartSpec,
    SUMMARY_MARK_LINES,
    build_chart_spec,
)
from .render import ChartRenderer, HtmlPageRenderer
from .page import (
    PageArtifact,
    assemble_page,
    default_chart_title,
    resolve_titles,
    write_page,
)

__all__ = [
    # Specification
    'MarkLine',
    'SeriesSpec',
    'ChartSpec',
    'SUMMARY_MARK_LINES',
    'build_chart_spec',
    # Rendering
    'ChartRenderer',
    'HtmlPageRenderer',
    # Page assembly
    'PageArtifact',
    'assemble_page',
    'default_chart_title',
    'resolve_titles',
    'write_page',
]
