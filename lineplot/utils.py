"""
Utility functions for lineplot.

Provides directory management, YAML loading and uniquely named file creation.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Tuple

import yaml

logger = logging.getLogger(__name__)


def ensure_dir(path: Path) -> Path:
    """
    Create directory if it doesn't exist.

    Args:
        path: Directory path to ensure exists

    Returns:
        Path: The directory path
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def load_yaml(path: Path) -> dict:
    """
    Safely load a YAML file.

    Args:
        path: Path to YAML file

    Returns:
        dict: Parsed YAML content

    Raises:
        FileNotFoundError: If file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    try:
        with open(path, 'r') as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Invalid YAML in {path}: {e}")


def create_unique_file(directory: Path, prefix: str, suffix: str) -> Tuple[int, Path]:
    """
    Atomically create a new, uniquely named file.

    Concurrent callers never receive the same name, so no locking is needed
    between requests writing into the same directory.

    Args:
        directory: Existing directory to create the file in
        prefix: File name prefix (e.g., 'uploaded-')
        suffix: File name suffix (e.g., '.csv')

    Returns:
        Tuple of the open OS-level file descriptor and the file path.
        The caller owns the descriptor.
    """
    fd, name = tempfile.mkstemp(prefix=prefix, suffix=suffix, dir=str(directory))
    return fd, Path(name)


def remove_file(path: Path) -> bool:
    """
    Remove a file if it exists.

    Returns:
        True if a file was removed.
    """
    try:
        os.remove(path)
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning(f"Could not remove {path.name}: {e}")
        return False
    return True
