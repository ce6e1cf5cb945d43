"""
Watch command for SemWatch CLI
"""

import dataclasses
import sys
import time
from pathlib import Path
from typing import Optional

import click
from colorama import Fore, Style

from semwatch.core.errors import WatcherSetupError
from semwatch.core.pipeline import Output, Pipeline
from semwatch.cli.utils import append_log, format_output, load_config_with_fallback
from semwatch.utils.logging_utils import setup_logger


@click.command()
@click.argument('path', type=click.Path(), default=None, required=False)
@click.option('--config', '-c', type=click.Path(),
              help='Path to configuration file (TOML)')
@click.option('--output', '-o', type=click.Path(),
              help='Append classified events to this JSON-lines file')
@click.option('--debounce', '-d', type=float,
              help='Debounce window in seconds (default: 1.0)')
@click.option('--ignore-name', '-i', 'ignore_names', multiple=True,
              help='File names to treat as metadata noise (e.g. .DS_Store)')
@click.option('--recursive/--no-recursive', default=None,
              help='Watch subdirectories recursively')
@click.option('--polling', is_flag=True,
              help='Use the polling observer instead of native notifications')
@click.option('--show-unknown', is_flag=True,
              help='Also print windows that could not be classified')
@click.option('--verbose', '-v', is_flag=True,
              help='Show full paths and debug logging')
def watch_command(path: Optional[str], config: Optional[str], output: Optional[str],
                  debounce: Optional[float], ignore_names: tuple, recursive: Optional[bool],
                  polling: bool, show_unknown: bool, verbose: bool):
    """Watch a directory and print one semantic event per debounce window.

    PATH: Directory to watch (defaults to the config's watch_path, then '.')
    """
    search_dir = Path(path).resolve() if path else Path.cwd()
    config_obj = load_config_with_fallback(config, search_dir, verbose)

    # CLI options override the config file
    overrides = {}
    if path:
        overrides['watch_path'] = str(search_dir)
    if output:
        overrides['output_file'] = output
    if debounce is not None:
        overrides['debounce_delay'] = debounce
    if ignore_names:
        overrides['ignore_names'] = list(ignore_names)
    if recursive is not None:
        overrides['recursive'] = recursive
    if polling:
        overrides['use_polling'] = True
    if show_unknown:
        overrides['emit_unknown'] = True
    config_obj = dataclasses.replace(config_obj, **overrides)

    if config_obj.debounce_delay <= 0:
        raise click.BadParameter('must be positive', param_hint='--debounce')

    setup_logger('semwatch', 'DEBUG' if verbose else config_obj.log_level)

    watch_path = Path(config_obj.watch_path).resolve()
    config_obj = dataclasses.replace(config_obj, watch_path=str(watch_path))
    log_path = Path(config_obj.output_file).resolve() if config_obj.output_file else None

    def sink(item: Output) -> None:
        click.echo(format_output(item, verbose))
        if log_path:
            append_log(log_path, item)

    click.echo(f"{Fore.GREEN}Starting SemWatch...{Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}Watching: {watch_path}{Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}Debounce window: {config_obj.debounce_delay}s{Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}Recursive: {config_obj.recursive}{Style.RESET_ALL}")
    if log_path:
        click.echo(f"{Fore.CYAN}Output file: {log_path}{Style.RESET_ALL}")

    pipeline = Pipeline(config_obj, sink)
    try:
        pipeline.start()
    except WatcherSetupError as e:
        click.echo(f"{Fore.RED}Error: {e}{Style.RESET_ALL}")
        sys.exit(1)

    try:
        click.echo(f"{Fore.YELLOW}Press Ctrl+C to stop watching...{Style.RESET_ALL}")
        while pipeline.is_alive():
            time.sleep(1)
    except KeyboardInterrupt:
        click.echo(f"\n{Fore.YELLOW}Stopping SemWatch...{Style.RESET_ALL}")
    finally:
        pipeline.stop()
        pipeline.join()
    click.echo(f"{Fore.GREEN}SemWatch stopped.{Style.RESET_ALL}")


# Alias command
@click.command()
@click.argument('path', type=click.Path(), default=None, required=False)
@click.option('--config', '-c', type=click.Path(),
              help='Path to configuration file (TOML)')
@click.option('--output', '-o', type=click.Path(),
              help='Append classified events to this JSON-lines file')
@click.option('--verbose', '-v', is_flag=True,
              help='Show full paths and debug logging')
@click.pass_context
def watch_alias(ctx, **kwargs):
    """Alias for 'watch' command."""
    ctx.invoke(watch_command, **kwargs)
