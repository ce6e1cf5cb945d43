"""
Logging utilities for SemWatch

Classified events go to stdout; diagnostics from the watcher, the pipeline
and the classifier go through the 'semwatch' logger tree to stderr.
"""

import logging
import sys
from typing import Optional, TextIO

ROOT_LOGGER = 'semwatch'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_LEVELS = ('debug', 'info', 'warning', 'error', 'critical')


def parse_level(level: str) -> int:
    """Map a level name from the config file or CLI to a logging level

    Raises:
        ValueError: if the name is not one of LOG_LEVELS
    """
    name = str(level).strip().lower()
    if name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {level!r}, expected one of: {', '.join(LOG_LEVELS)}")
    return getattr(logging, name.upper())


def setup_logger(name: str = ROOT_LOGGER, level: str = 'info',
                 stream: Optional[TextIO] = None, format_string: Optional[str] = None) -> logging.Logger:
    """Attach a single stream handler to the named logger.

    Calling this again replaces the previous handler, so the watch command
    can be invoked repeatedly in one process without doubling output.
    """
    numeric_level = parse_level(level)
    logger = logging.getLogger(name)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(numeric_level)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
