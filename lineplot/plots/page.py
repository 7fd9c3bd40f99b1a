"""
Multi-chart page assembly.

Collects chart specifications into one page and writes it through a renderer
to a file path or an open text stream.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import IO, Optional, Sequence, Tuple, Union

from ..config.core import DEFAULT_CHART_TITLE_TEMPLATE, DEFAULT_PAGE_TITLE
from ..errors import AssemblyError, ValidationError
from ..logging.error_codes import ErrorCode
from ..utils import remove_file
from .render import ChartRenderer
from .spec import ChartSpec
from ..logging.loggers import plot_logger as logger

Destination = Union[str, Path, IO[str]]


@dataclass(frozen=True)
class PageArtifact:
    """An ordered set of charts destined for one output file."""
    charts: Tuple[ChartSpec, ...]
    title: str = DEFAULT_PAGE_TITLE


def assemble_page(specs: Sequence[ChartSpec], page_title: str = DEFAULT_PAGE_TITLE) -> PageArtifact:
    """
    Assemble chart specifications into a page.

    Raises:
        AssemblyError: If no chart is given
    """
    if not specs:
        raise AssemblyError("A page needs at least one chart", ErrorCode.EMPTY_PAGE)
    return PageArtifact(charts=tuple(specs), title=page_title)


def default_chart_title(source: Union[str, Path], template: str = DEFAULT_CHART_TITLE_TEMPLATE) -> str:
    """Derive a chart title from a source identifier, e.g. 'chart for data.csv'."""
    return template.format(name=Path(str(source)).name)


def resolve_titles(
    sources: Sequence[Union[str, Path]],
    titles: Optional[Sequence[str]] = None,
    template: str = DEFAULT_CHART_TITLE_TEMPLATE,
) -> Tuple[str, ...]:
    """
    Pair one title with every input.

    Args:
        sources: Input identifiers, one per chart
        titles: Explicit titles; None or empty derives one per input
        template: Template for derived titles ('{name}' is the file name)

    Returns:
        One title per source, in order

    Raises:
        ValidationError: If explicit titles are given but their count differs
            from the number of inputs
    """
    if not titles:
        return tuple(default_chart_title(source, template) for source in sources)
    if len(titles) != len(sources):
        raise ValidationError(
            f"The number of titles ({len(titles)}) must match the number of "
            f"data files ({len(sources)})",
            ErrorCode.TITLE_COUNT_MISMATCH,
        )
    return tuple(titles)


def write_page(page: PageArtifact, destination: Destination, renderer: ChartRenderer) -> None:
    """
    Render a page and write it to a path or stream.

    The page is fully rendered before the destination is touched. A failed
    write to a path removes the partial file.

    Args:
        page: Page to write
        destination: File path, or an open text stream (left open)
        renderer: Renderer producing the page markup

    Raises:
        AssemblyError: If rendering fails or the destination is unwritable
    """
    if isinstance(destination, str) and not destination:
        raise AssemblyError("Output plotting file must be specified", ErrorCode.IO_PATH_ERROR)

    try:
        content = renderer.render_page(page)
    except AssemblyError:
        raise
    except (ValueError, TypeError, RuntimeError) as e:
        raise AssemblyError(f"Failed to render charts: {e}", ErrorCode.RENDER_FAILED) from e

    if isinstance(destination, (str, Path)):
        path = Path(destination)
        try:
            with open(path, 'w', encoding='utf-8') as f:
                f.write(content)
        except OSError as e:
            remove_file(path)
            raise AssemblyError(
                f"Cannot create output file {path.name}: {e.strerror or e}",
                ErrorCode.IO_WRITE_ERROR,
            ) from e
    else:
        try:
            destination.write(content)
        except OSError as e:
            raise AssemblyError(f"Cannot write charts to output stream: {e}", ErrorCode.IO_WRITE_ERROR) from e

    logger.info(f"Wrote page '{page.title}' with {len(page.charts)} chart(s)")
