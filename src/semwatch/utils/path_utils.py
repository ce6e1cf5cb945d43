"""
Path and file utilities for SemWatch
"""

import os
from pathlib import Path
from typing import Any, Iterable, Union

from .logging_utils import get_logger

logger = get_logger(__name__)


def bytes_to_string(data: Any) -> str:
    """Convert bytes to string with minimal processing.

    watchdog may report paths as bytes when the watched path was given as
    bytes, so every path coming from an event goes through here.

    Args:
        data: Data to convert, can be bytes or other types

    Returns:
        String representation with null bytes removed
    """
    if isinstance(data, bytes):
        return os.fsdecode(data).rstrip('\x00')
    return str(data).rstrip('\x00')


def same_parent(first: Path, second: Path) -> bool:
    """True when both paths live directly in the same directory."""
    return Path(first).parent == Path(second).parent


def has_reserved_name(path: Path, names: Iterable[str]) -> bool:
    """Check whether the final component of a path is one of the reserved names."""
    return Path(path).name in set(names)


def path_exists(path: Union[str, Path], errors_as_missing: bool = True) -> bool:
    """Check if a path exists right now.

    A missing path (or a missing parent component) is reported as absent.
    Any other stat failure, such as permission denied or a path the OS
    rejects outright, is reported as absent when errors_as_missing is set
    and as present otherwise.
    """
    try:
        os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return False
    except (OSError, ValueError) as e:
        # ValueError: the path cannot be handed to the OS at all (embedded NUL)
        logger.warning("Could not stat %s: %s", path, e)
        return not errors_as_missing
    return True


def ensure_directory_exists(directory: Path) -> None:
    """Ensure a directory exists, creating it if necessary."""
    directory.mkdir(parents=True, exist_ok=True)
