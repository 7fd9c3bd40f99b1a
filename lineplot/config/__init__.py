"""
Configuration loading and management for lineplot.

Public API:
    - load_settings: Load raw settings from config/settings.yaml
    - get_settings: Build the immutable Settings value
    - clear_config_cache: Clear the configuration cache
    - resolve_form_options: Resolve upload form fields against defaults
"""

from __future__ import annotations

from .core import (
    DisplayDefaults,
    Settings,
    load_settings,
    build_settings,
    get_settings,
    clear_config_cache,
)

from .forms import (
    FormOptions,
    parse_bool,
    resolve_form_options,
)


__all__ = [
    # Core
    'DisplayDefaults',
    'Settings',
    'load_settings',
    'build_settings',
    'get_settings',
    'clear_config_cache',
    # Forms
    'FormOptions',
    'parse_bool',
    'resolve_form_options',
]
