"""Utility functions for SemWatch."""

from .path_utils import (
    bytes_to_string,
    same_parent,
    has_reserved_name,
    path_exists,
    ensure_directory_exists,
)
from .logging_utils import setup_logger, get_logger

__all__ = [
    # Path utilities
    'bytes_to_string',
    'same_parent',
    'has_reserved_name',
    'path_exists',
    'ensure_directory_exists',
    # Logging utilities
    'setup_logger',
    'get_logger',
]
