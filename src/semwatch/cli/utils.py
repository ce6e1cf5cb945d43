"""
Utility functions for CLI commands
"""

import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from colorama import Fore, Style

from semwatch.core.config import DEFAULT_CONFIG_NAME, Config, load_config, load_default_config
from semwatch.core.errors import ConfigError
from semwatch.core.pipeline import DegradedObservation, Output
from semwatch.utils.path_utils import ensure_directory_exists

EVENT_COLORS = {
    'create': Fore.GREEN,
    'modify': Fore.YELLOW,
    'delete': Fore.RED,
    'rename': Fore.CYAN,
    'move': Fore.MAGENTA,
    'unknown': Fore.WHITE,
    'degraded': Fore.RED,
}


def load_config_with_fallback(config_file: Optional[str], search_dir: Path, verbose: bool = False) -> Config:
    """Load configuration with automatic fallback to default config file and default config."""
    config_obj = None

    if not config_file:
        # Look for default config file in search directory
        default_config = search_dir / DEFAULT_CONFIG_NAME
        if default_config.exists():
            config_file = str(default_config)
            if verbose:
                click.echo(f"{Fore.CYAN}Using default config: {config_file}{Style.RESET_ALL}")

    if config_file:
        try:
            config_obj = load_config(config_file)
        except ConfigError as e:
            click.echo(f"{Fore.RED}Error: {e}{Style.RESET_ALL}")
            sys.exit(1)
        if not config_obj:
            click.echo(f"{Fore.RED}Error: Could not load config file: {config_file}{Style.RESET_ALL}")
            sys.exit(1)

    if not config_obj:
        config_obj = load_default_config()

    return config_obj


def check_file_exists(file_path: Path, file_type: str = "file") -> bool:
    """Check if a file exists and show error if not."""
    if not file_path.exists():
        click.echo(f"{Fore.RED}Error: {file_type.title()} not found: {file_path}{Style.RESET_ALL}")
        return False
    return True


def format_output(output: Output, verbose: bool = False) -> str:
    """Render a classified event for the console"""
    if isinstance(output, DegradedObservation):
        color = EVENT_COLORS['degraded']
        errors = '; '.join(str(e) for e in output.errors)
        line = f"{color}DEGRADED{Style.RESET_ALL}: {errors}"
        if not output.event.is_unknown:
            line += f" ({format_output(output.event, verbose)})"
        return line

    color = EVENT_COLORS.get(output.kind, '')
    label = f"{color}{output.kind.upper()}{Style.RESET_ALL}"
    if output.is_unknown:
        return label

    if verbose:
        first, second = output.path, output.path2
    else:
        first = output.path.name if output.path else None
        second = output.path2.name if output.path2 else None

    if second is not None:
        return f"{label}: {first} -> {second}"
    return f"{label}: {first}"


def append_log(log_path: Path, output: Output) -> None:
    """Append one classified event to a JSON-lines log"""
    ensure_directory_exists(log_path.parent)
    record = {'timestamp': datetime.now().isoformat()}
    record.update(output.to_dict())
    with open(log_path, 'a', encoding='utf-8') as f:
        f.write(json.dumps(record) + '\n')

