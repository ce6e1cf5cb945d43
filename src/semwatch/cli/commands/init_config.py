"""
Init-config command for SemWatch CLI
"""

import sys
from pathlib import Path

import click
from colorama import Fore, Style

from semwatch.core.config import DEFAULT_CONFIG_NAME, DEFAULT_CONFIG_TOML


@click.command()
@click.argument('config_path', type=click.Path(), default=DEFAULT_CONFIG_NAME)
@click.option('--force', '-f', is_flag=True, help='Overwrite an existing file')
def init_config_command(config_path: str, force: bool):
    """Create a TOML configuration file. Defaults to 'semwatch.config.toml' if no path specified."""

    if not config_path.endswith('.toml'):
        click.echo(f"{Fore.YELLOW}Warning: Config file should have .toml extension. Adding .toml{Style.RESET_ALL}")
        config_path = config_path + '.toml'

    target = Path(config_path)
    if target.exists() and not force:
        click.echo(f"{Fore.RED}Error: {target} already exists (use --force to overwrite){Style.RESET_ALL}")
        sys.exit(1)

    try:
        target.write_text(DEFAULT_CONFIG_TOML, encoding='utf-8')
    except OSError as e:
        click.echo(f"{Fore.RED}Error creating config file: {e}{Style.RESET_ALL}")
        sys.exit(1)

    click.echo(f"{Fore.GREEN}TOML configuration file created: {target}{Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}Edit this file to customize your watching preferences.{Style.RESET_ALL}")
