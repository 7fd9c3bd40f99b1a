"""
Centralized path resolution for lineplot.

Provides project root discovery using marker files, with caching. Relative
directories from the settings file (output, temp, static, logs) are resolved
against this root, so the CLI and the web service behave the same regardless of
the working directory they are started from.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Union


class ProjectRootNotFoundError(Exception):
    """Raised when project root cannot be determined."""
    pass


# Project marker files in priority order
PROJECT_MARKERS = [
    'pyproject.toml',
    'config/settings.yaml',
    '.git',
]


@lru_cache(maxsize=1)
def get_project_root() -> Path:
    """
    Find the project root directory using marker-based discovery.

    Searches upward from this file's location for known project markers.
    Results are cached.

    Environment variable override:
        Set LINEPLOT_ROOT to override automatic detection.

    Returns:
        Path: Absolute path to project root

    Raises:
        ProjectRootNotFoundError: If no project markers are found
    """
    env_root = os.environ.get('LINEPLOT_ROOT')
    if env_root:
        env_path = Path(env_root)
        if env_path.exists():
            return env_path.resolve()

    current = Path(__file__).resolve().parent
    searched_paths = []

    while current != current.parent:
        searched_paths.append(current)
        for marker in PROJECT_MARKERS:
            if (current / marker).exists():
                return current
        current = current.parent

    raise ProjectRootNotFoundError(
        f"Could not find project root. Searched for markers {PROJECT_MARKERS} "
        f"in directories: {searched_paths[:5]}... "
        f"Set LINEPLOT_ROOT environment variable to override."
    )


def resolve_path(path: Union[str, Path]) -> Path:
    """Resolve a possibly relative path against the project root."""
    path = Path(path)
    if path.is_absolute():
        return path
    return get_project_root() / path


def get_config_dir() -> Path:
    """Get the config directory path."""
    return get_project_root() / 'config'


def get_logs_dir() -> Path:
    """Get the logs directory path."""
    return get_project_root() / 'logs'
