"""
Core configuration loading and cache management.

Settings are read from ``config/settings.yaml`` once and turned into an
immutable ``Settings`` value. Keys missing from the file fall back to the
built-in defaults below.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import yaml

from ..errors import LinePlotError
from ..logging.error_codes import ErrorCode
from ..paths import get_config_dir, resolve_path
from ..utils import load_yaml

logger = logging.getLogger(__name__)

# Built-in defaults
DEFAULT_TITLE = "unamed line chart"
DEFAULT_X_TITLE = "x"
DEFAULT_Y_TITLE = "y"
DEFAULT_WIDTH = 2400
DEFAULT_HEIGHT = 500
DEFAULT_PAGE_TITLE = "Line Charts"
DEFAULT_CHART_TITLE_TEMPLATE = "chart for {name}"
DEFAULT_MAX_UPLOAD_BYTES = 20 * 1024 * 1024
DEFAULT_FORM_FIELDS: Mapping[str, str] = MappingProxyType({
    'xaxis': 'x',
    'yaxis': 'y',
    'c1x': 'true',
    'r1h': 'true',
    'smooth': 'false',
})

# Cache for loaded configs
_config_cache: Dict[str, Any] = {}


@dataclass(frozen=True)
class DisplayDefaults:
    """Fallback values applied to absent display parameters."""
    title: str = DEFAULT_TITLE
    x_title: str = DEFAULT_X_TITLE
    y_title: str = DEFAULT_Y_TITLE
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT


@dataclass(frozen=True)
class Settings:
    """Immutable application settings, built once per invocation."""
    display: DisplayDefaults = field(default_factory=DisplayDefaults)
    page_title: str = DEFAULT_PAGE_TITLE
    chart_title_template: str = DEFAULT_CHART_TITLE_TEMPLATE
    output_dir: Path = Path('output')
    temp_dir: Path = Path('tmp')
    static_dir: Path = Path('lineplot/web/static')
    host: str = '0.0.0.0'
    port: int = 8080
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    form_defaults: Mapping[str, str] = field(default_factory=lambda: DEFAULT_FORM_FIELDS)
    log_level: str = 'INFO'
    log_file: bool = False


def _get_config_path(filename: str) -> Path:
    """Get path to config file."""
    return get_config_dir() / filename


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load raw settings from config/settings.yaml.

    A missing file is not an error: every setting has a built-in default.

    Args:
        path: Optional explicit settings file (bypasses the cache)

    Returns:
        dict: Settings dictionary

    Raises:
        LinePlotError: If the file exists but is not valid YAML
    """
    cache_key = 'settings'
    if path is None and cache_key in _config_cache:
        logger.debug("Returning cached settings")
        return _config_cache[cache_key]

    settings_path = path or _get_config_path('settings.yaml')
    try:
        raw = load_yaml(settings_path)
    except FileNotFoundError:
        logger.debug(f"No settings file at {settings_path}, using defaults")
        raw = {}
    except yaml.YAMLError as e:
        raise LinePlotError(str(e), ErrorCode.CONFIG_LOAD_ERROR) from e

    if not isinstance(raw, dict):
        raise LinePlotError(
            f"Settings file {settings_path.name} must contain a mapping",
            ErrorCode.CONFIG_INVALID,
        )

    if path is None:
        _config_cache[cache_key] = raw
    return raw


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name) or {}
    if not isinstance(value, dict):
        raise LinePlotError(f"Settings section '{name}' must be a mapping", ErrorCode.CONFIG_INVALID)
    return value


def build_settings(raw: Dict[str, Any]) -> Settings:
    """
    Build an immutable Settings value from a raw settings dictionary.

    Args:
        raw: Parsed settings (as returned by load_settings)

    Returns:
        Settings with relative directories resolved against the project root

    Raises:
        LinePlotError: If a value has the wrong type
    """
    display = _section(raw, 'display')
    page = _section(raw, 'page')
    directories = _section(raw, 'directories')
    web = _section(raw, 'web')
    log = _section(raw, 'logging')

    form_defaults = dict(DEFAULT_FORM_FIELDS)
    form_defaults.update({k: str(v) for k, v in (web.get('form_defaults') or {}).items()})

    try:
        return Settings(
            display=DisplayDefaults(
                title=str(display.get('title', DEFAULT_TITLE)),
                x_title=str(display.get('x_title', DEFAULT_X_TITLE)),
                y_title=str(display.get('y_title', DEFAULT_Y_TITLE)),
                width=int(display.get('width', DEFAULT_WIDTH)),
                height=int(display.get('height', DEFAULT_HEIGHT)),
            ),
            page_title=str(page.get('title', DEFAULT_PAGE_TITLE)),
            chart_title_template=str(page.get('chart_title_template', DEFAULT_CHART_TITLE_TEMPLATE)),
            output_dir=resolve_path(directories.get('output', 'output')),
            temp_dir=resolve_path(directories.get('temp', 'tmp')),
            static_dir=resolve_path(directories.get('static', 'lineplot/web/static')),
            host=str(web.get('host', '0.0.0.0')),
            port=int(web.get('port', 8080)),
            max_upload_bytes=int(web.get('max_upload_bytes', DEFAULT_MAX_UPLOAD_BYTES)),
            form_defaults=MappingProxyType(form_defaults),
            log_level=str(log.get('level', 'INFO')).upper(),
            log_file=bool(log.get('file', False)),
        )
    except (TypeError, ValueError) as e:
        raise LinePlotError(f"Invalid settings value: {e}", ErrorCode.CONFIG_INVALID) from e


def get_settings(path: Optional[Path] = None) -> Settings:
    """Load and build the application settings."""
    return build_settings(load_settings(path))


def clear_config_cache() -> None:
    """Clear the configuration cache. Useful for testing or reloading configs."""
    cache_size = len(_config_cache)
    _config_cache.clear()
    logger.debug(f"Cleared config cache ({cache_size} entries)")
