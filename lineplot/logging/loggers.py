"""
Pre-configured module loggers.

Provides loggers for the common namespaces across lineplot.
"""

from .config import get_logger


# Module-level loggers for common namespaces
data_logger = get_logger('data')
validation_logger = get_logger('validation')
plot_logger = get_logger('plot')
pipeline_logger = get_logger('pipeline')
web_logger = get_logger('web')
cli_logger = get_logger('cli')


# Public exports
__all__ = [
    "data_logger",
    "validation_logger",
    "plot_logger",
    "pipeline_logger",
    "web_logger",
    "cli_logger",
]
