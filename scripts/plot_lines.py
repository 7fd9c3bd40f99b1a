#!/usr/bin/env python3
"""
Line chart generator for lineplot.

Plots one chart per CSV data file into a single HTML page, or starts the web
service that does the same for uploaded files.
"""

import sys
from enum import IntFlag
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import click

from lineplot.config import get_settings
from lineplot.errors import AssemblyError, LinePlotError, LoadError, StartupError, ValidationError
from lineplot.logging import configure_logging, cli_logger, log_exception
from lineplot.logging.error_codes import ErrorCode
from lineplot.pipeline import PlotOptions, plot_files
from lineplot.plots import resolve_titles
from lineplot.validation import resolve_display_config


class ExitCode(IntFlag):
    """Process exit status, one bit per failure category."""
    OK = 0
    PARAMETER = 1
    LOAD_DATA = 2
    PLOTTING = 4
    FILE_CREATION = 8
    WEB_SERVER = 16
    EXAMPLE = 32


EXAMPLES = """

Example 1:

- data.csv:

	X, Series 1, Series 2
	1, 100, 200
	2, 210, 210
	3, 89, 300

- overview:
	- the 1st column is used as x-axis coordinate point
	- the 1st row is used for heading

- command: plot_lines.py -o example1.html -t "example 1" -d data.csv --c1x --r1h

Example 2:

- data.csv:

	Series 1, Series 2
	100, 200
	210, 210
	89, 300

- overview:
	- there is no specific data for x-axis coordinate point
	- the 1st row is used for heading

- command: plot_lines.py -o example2.html -t "example 2" -d data.csv --r1h

Example 3:

- data.csv:

	100
	210
	89

- overview:
	- there is no specific data for x-axis coordinate point
	- there is no heading

- command: plot_lines.py -o example3.html -t "example 3" -d data.csv

Example 4:

- command: plot_lines.py -o both.html -d cpu.csv -d mem.csv --c1x --r1h

- overview:
	- one chart per data file, titled "chart for cpu.csv" and "chart for mem.csv"
	- when -t is given it must be given once per -d
"""

PARAMETER_CODES = {ErrorCode.TITLE_COUNT_MISMATCH, ErrorCode.INVALID_DIMENSION}
FILE_CODES = {ErrorCode.IO_WRITE_ERROR, ErrorCode.IO_PATH_ERROR}


def exit_code_for(error: LinePlotError) -> ExitCode:
    """Map an error to its exit status category."""
    if error.error_code in PARAMETER_CODES:
        return ExitCode.PARAMETER
    if isinstance(error, LoadError):
        return ExitCode.LOAD_DATA
    if isinstance(error, AssemblyError) and error.error_code in FILE_CODES:
        return ExitCode.FILE_CREATION
    if isinstance(error, StartupError):
        return ExitCode.WEB_SERVER
    if isinstance(error, (ValidationError, AssemblyError)):
        return ExitCode.PLOTTING
    return ExitCode.PARAMETER


def fail(message: str, code: ExitCode) -> None:
    click.echo(f"✗ Error: {message}", err=True)
    sys.exit(int(code))


def run_web(settings, host, port) -> None:
    from lineplot.web import serve

    try:
        serve(settings, host=host, port=port)
    except (StartupError, OSError) as e:
        log_exception(cli_logger, "Cannot start web service", exc=e, error_code=ErrorCode.STARTUP_FAILED)
        fail(f"cannot start web service: {e}", ExitCode.WEB_SERVER)


@click.command()
@click.option('-o', '--output', default='lines.html', show_default=True,
              help='Output file used for holding the charts')
@click.option('-t', '--title', 'titles', multiple=True,
              help='Chart title; repeat once per data file (default: "chart for <file>")')
@click.option('-d', '--data', 'data_files', multiple=True, default=('data.csv',), show_default=True,
              help='CSV data for plotting; repeat for one chart per file')
@click.option('-x', '--xtitle', default='X', show_default=True, help='X-axis title')
@click.option('-y', '--ytitle', default='Y', show_default=True, help='Y-axis title')
@click.option('--c1x', is_flag=True, help='Use the 1st column of the CSV data as x-axis coordinate points')
@click.option('--r1h', is_flag=True, help='Use the 1st row of the CSV data as series names')
@click.option('-s', '--smooth', is_flag=True, help='Draw smooth lines')
@click.option('--width', type=int, default=2400, show_default=True, help='Chart width in pixels')
@click.option('--height', type=int, default=500, show_default=True, help='Chart height in pixels')
@click.option('--example', is_flag=True, help='Show examples on how to use the tool')
@click.option('--web', is_flag=True, help='Run as a web service instead of plotting files')
@click.option('--host', default=None, help='Web service host (default: from config/settings.yaml)')
@click.option('--port', type=int, default=None, help='Web service port (default: from config/settings.yaml)')
@click.option('--log-level', default=None,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
              help='Log level (default: from config/settings.yaml)')
def main(output, titles, data_files, xtitle, ytitle, c1x, r1h, smooth, width, height,
         example, web, host, port, log_level):
    """
    Plot CSV data as line charts in a single HTML page.

    Examples:
        # One chart, 1st column as x-axis, 1st row as series names
        python scripts/plot_lines.py -o example1.html -t "example 1" -d data.csv --c1x --r1h

        # Two charts in one page
        python scripts/plot_lines.py -o both.html -d cpu.csv -d mem.csv --c1x --r1h

        # Web service
        python scripts/plot_lines.py --web --port 8080
    """
    if example:
        click.echo(EXAMPLES, err=True)
        sys.exit(int(ExitCode.EXAMPLE))

    try:
        settings = get_settings()
    except LinePlotError as e:
        fail(f"cannot load settings: {e}", ExitCode.PARAMETER)

    configure_logging(level=(log_level or settings.log_level).upper(), file=settings.log_file)

    if web:
        run_web(settings, host, port)
        return

    # Parameters are checked before any data is read
    try:
        resolve_titles(data_files, titles, settings.chart_title_template)
        resolve_display_config(width=width, height=height, defaults=settings.display)
    except ValidationError as e:
        fail(str(e), ExitCode.PARAMETER)

    options = PlotOptions(
        x_title=xtitle,
        y_title=ytitle,
        c1x=c1x,
        r1h=r1h,
        smooth=smooth,
        width=width,
        height=height,
    )
    try:
        plot_files(
            list(data_files),
            output,
            options,
            titles=list(titles),
            page_title=settings.page_title,
            title_template=settings.chart_title_template,
            defaults=settings.display,
        )
    except LinePlotError as e:
        fail(str(e), exit_code_for(e))

    click.echo(f"plotting file: {output}")


if __name__ == '__main__':
    main()
