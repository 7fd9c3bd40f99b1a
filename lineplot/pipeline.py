"""
File-level pipeline shared by the command line and the web service.

load → extract → validate → build spec, once per input, then one page for all
inputs. Any error aborts the whole run before the output is written.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

from .config.core import DEFAULT_CHART_TITLE_TEMPLATE, DEFAULT_PAGE_TITLE, DisplayDefaults
from .data import CsvSource, load_axis_series
from .errors import LinePlotError
from .logging import LogContext, log_exception
from .models import DisplayConfig
from .plots import (
    ChartRenderer,
    ChartSpec,
    HtmlPageRenderer,
    assemble_page,
    build_chart_spec,
    resolve_titles,
    write_page,
)
from .plots.page import Destination
from .validation import resolve_display_config, validate_axis_series
from .logging.loggers import pipeline_logger as logger


@dataclass(frozen=True)
class PlotOptions:
    """Options shared by every chart of one invocation."""
    x_title: str = ""
    y_title: str = ""
    c1x: bool = False
    r1h: bool = False
    smooth: bool = False
    width: int = 0
    height: int = 0


def build_chart(
    source: CsvSource,
    display: DisplayConfig,
    c1x: bool = False,
    r1h: bool = False,
) -> ChartSpec:
    """
    Load one CSV source and build its chart specification.

    Args:
        source: CSV path or stream
        display: Normalized display parameters of this chart
        c1x: First column holds x-axis values
        r1h: First row holds series names

    Returns:
        ChartSpec

    Raises:
        LoadError: If the source cannot be loaded
        ValidationError: If the series data is inconsistent
    """
    raw = load_axis_series(source, c1x=c1x, r1h=r1h)
    series_set = validate_axis_series(raw)
    return build_chart_spec(series_set, display)


def plot_files(
    sources: Sequence[Union[str, Path]],
    destination: Destination,
    options: PlotOptions,
    titles: Optional[Sequence[str]] = None,
    page_title: str = DEFAULT_PAGE_TITLE,
    title_template: str = DEFAULT_CHART_TITLE_TEMPLATE,
    defaults: Optional[DisplayDefaults] = None,
    renderer: Optional[ChartRenderer] = None,
) -> None:
    """
    Plot one chart per CSV file into a single page.

    Args:
        sources: CSV files, one chart each
        destination: Output path or text stream
        options: Shared axis titles, toggles and dimensions
        titles: Explicit chart titles; must match ``sources`` in count when given
        page_title: Title of the page document
        title_template: Template of derived chart titles
        defaults: Display defaults (built-in if None)
        renderer: Renderer (HtmlPageRenderer if None)

    Raises:
        LinePlotError: On the first failure; nothing is written in that case
    """
    names = [Path(str(source)).name for source in sources]
    chart_titles = resolve_titles(names, titles, title_template)
    specs = []
    for source, name, title in zip(sources, names, chart_titles):
        with LogContext(phase="plot", source=name):
            display = resolve_display_config(
                title=title,
                x_title=options.x_title,
                y_title=options.y_title,
                width=options.width,
                height=options.height,
                smooth=options.smooth,
                defaults=defaults,
            )
            try:
                specs.append(build_chart(source, display, c1x=options.c1x, r1h=options.r1h))
            except LinePlotError as e:
                log_exception(logger, f"Cannot plot {name}", exc=e, include_traceback=False)
                raise
            logger.debug(f"Built chart '{title}'")

    page = assemble_page(specs, page_title=page_title)
    write_page(page, destination, renderer or HtmlPageRenderer())
