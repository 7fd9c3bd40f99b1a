"""
Display parameter normalization.

Absent display parameters (empty strings, zero sizes) silently take their
defaults; negative sizes are rejected.
"""

from typing import Optional

from ..config.core import DisplayDefaults
from ..errors import ValidationError
from ..logging.error_codes import ErrorCode
from ..models import DisplayConfig


def _resolve_dimension(name: str, value: int, default: int) -> int:
    if value < 0:
        raise ValidationError(
            f"Chart {name} must be larger than 0, default {default}px",
            ErrorCode.INVALID_DIMENSION,
        )
    return value or default


def resolve_display_config(
    title: Optional[str] = None,
    x_title: Optional[str] = None,
    y_title: Optional[str] = None,
    width: int = 0,
    height: int = 0,
    smooth: bool = False,
    defaults: Optional[DisplayDefaults] = None,
) -> DisplayConfig:
    """
    Build a fully populated DisplayConfig.

    Args:
        title: Chart title; empty or None takes the placeholder title
        x_title: X-axis title; empty or None takes "x"
        y_title: Y-axis title; empty or None takes "y"
        width: Pixel width; 0 takes the default (2400)
        height: Pixel height; 0 takes the default (500)
        smooth: Draw smoothed curves
        defaults: Fallback values (built-in defaults if None)

    Returns:
        DisplayConfig with no absent values

    Raises:
        ValidationError: If width or height is negative
    """
    defaults = defaults or DisplayDefaults()
    return DisplayConfig(
        title=title or defaults.title,
        x_title=x_title or defaults.x_title,
        y_title=y_title or defaults.y_title,
        width=_resolve_dimension('width', width, defaults.width),
        height=_resolve_dimension('height', height, defaults.height),
        smooth=bool(smooth),
    )


def normalize_display_config(config: DisplayConfig, defaults: Optional[DisplayDefaults] = None) -> DisplayConfig:
    """Normalize an existing DisplayConfig; see resolve_display_config()."""
    return resolve_display_config(
        title=config.title,
        x_title=config.x_title,
        y_title=config.y_title,
        width=config.width,
        height=config.height,
        smooth=config.smooth,
        defaults=defaults,
    )
