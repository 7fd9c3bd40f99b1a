"""
Validation and defaulting for lineplot.

Public API:
    - validate_axis_series: check series consistency, fill in names and x-axis
    - resolve_display_config: build a DisplayConfig with defaults applied
    - normalize_display_config: apply defaults to an existing DisplayConfig
"""

from .series import validate_axis_series, default_series_names, default_x_axis
from .display import resolve_display_config, normalize_display_config

__all__ = [
    'validate_axis_series',
    'default_series_names',
    'default_x_axis',
    'resolve_display_config',
    'normalize_display_config',
]
