"""
CLI commands package for SemWatch
"""

from .watch import watch_command, watch_alias
from .classify import classify_command
from .init_config import init_config_command
from .report import report_command

__all__ = [
    'watch_command', 'watch_alias',
    'classify_command',
    'init_config_command',
    'report_command',
]
