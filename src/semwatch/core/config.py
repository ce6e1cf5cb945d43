"""
Configuration management for SemWatch
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli

from .classifier import ClassifierOptions
from .debouncer import DEFAULT_DEBOUNCE_DELAY
from .errors import ConfigError
from .filters import DEFAULT_IGNORE_NAMES
from ..utils.logging_utils import parse_level

DEFAULT_CONFIG_NAME = 'semwatch.config.toml'

DEFAULT_CONFIG_TOML = '''# SemWatch Configuration File

[semwatch]
watch_path = "."
recursive = true
debounce_delay = 1.0
ignore_names = [".DS_Store"]
removal_skips_ignored = false
stat_errors_as_missing = true
emit_unknown = false
use_polling = false
log_level = "info"
'''


@dataclass
class Config:
    """Configuration class for SemWatch"""
    watch_path: str = '.'
    recursive: bool = True
    debounce_delay: float = DEFAULT_DEBOUNCE_DELAY
    ignore_names: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_NAMES))
    removal_skips_ignored: bool = False
    stat_errors_as_missing: bool = True
    emit_unknown: bool = False
    use_polling: bool = False
    log_level: str = 'info'
    output_file: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create Config instance from dictionary

        Raises:
            ConfigError: if a value has the wrong type
        """
        try:
            debounce_delay = float(data.get('debounce_delay', DEFAULT_DEBOUNCE_DELAY))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"debounce_delay must be a number: {e}") from e
        if debounce_delay <= 0:
            raise ConfigError(f"debounce_delay must be positive, got {debounce_delay}")

        ignore_names = data.get('ignore_names', list(DEFAULT_IGNORE_NAMES))
        if isinstance(ignore_names, str) or not isinstance(ignore_names, list):
            raise ConfigError("ignore_names must be a list of file names")

        log_level = str(data.get('log_level', 'info'))
        try:
            parse_level(log_level)
        except ValueError as e:
            raise ConfigError(str(e)) from e

        return cls(
            watch_path=str(data.get('watch_path', '.')),
            recursive=bool(data.get('recursive', True)),
            debounce_delay=debounce_delay,
            ignore_names=[str(name) for name in ignore_names],
            removal_skips_ignored=bool(data.get('removal_skips_ignored', False)),
            stat_errors_as_missing=bool(data.get('stat_errors_as_missing', True)),
            emit_unknown=bool(data.get('emit_unknown', False)),
            use_polling=bool(data.get('use_polling', False)),
            log_level=log_level,
            output_file=data.get('output_file'),
        )

    def classifier_options(self) -> ClassifierOptions:
        return ClassifierOptions(
            ignore_names=tuple(self.ignore_names),
            removal_skips_ignored=self.removal_skips_ignored,
            stat_errors_as_missing=self.stat_errors_as_missing,
        )


def load_config(config_path: str) -> Optional[Config]:
    """Load configuration from a TOML file

    Returns None if the file does not exist.

    Raises:
        ConfigError: if the file cannot be parsed
    """
    config_file = Path(config_path)
    if not config_file.exists():
        return None

    try:
        with open(config_file, 'rb') as f:
            data = tomli.load(f)
    except (OSError, tomli.TOMLDecodeError) as e:
        raise ConfigError(f"Error loading config {config_file}: {e}") from e

    # Handle both flat and nested config formats
    if 'semwatch' in data:
        data = data['semwatch']

    return Config.from_dict(data)


def load_default_config() -> Config:
    """Load the built-in default configuration"""
    return Config.from_dict(tomli.loads(DEFAULT_CONFIG_TOML)['semwatch'])
