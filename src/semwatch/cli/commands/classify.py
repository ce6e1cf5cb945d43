"""
Classify command for SemWatch CLI
"""

import dataclasses
import json
import sys
from pathlib import Path
from typing import Any, List, Optional

import click
from colorama import Fore, Style

from semwatch.core.classifier import Classifier
from semwatch.core.events import RawEvent
from semwatch.cli.utils import check_file_exists, format_output, load_config_with_fallback


def parse_batches(data: Any) -> List[List[RawEvent]]:
    """Read one batch (a list of event objects) or several (a list of lists)

    Raises:
        ValueError: if the document does not have either shape
    """
    if not isinstance(data, list):
        raise ValueError("expected a JSON list of events or a list of batches")
    if data and all(isinstance(item, list) for item in data):
        return [[RawEvent.from_dict(event) for event in batch] for batch in data]
    return [[RawEvent.from_dict(event) for event in data]]


@click.command()
@click.argument('batch_file', type=click.Path())
@click.option('--config', '-c', type=click.Path(),
              help='Path to configuration file (TOML)')
@click.option('--format', 'output_format', type=click.Choice(['text', 'json']),
              default='text', help='Output format')
@click.option('--skip-ignored-removals', is_flag=True,
              help='Leave ignored events out of remove-then-create move detection')
def classify_command(batch_file: str, config: Optional[str], output_format: str,
                     skip_ignored_removals: bool):
    """Classify recorded batches of raw events without watching anything.

    BATCH_FILE: JSON file holding a list of raw events, or a list of such lists
    """
    batch_path = Path(batch_file).resolve()
    if not check_file_exists(batch_path, "batch file"):
        sys.exit(1)

    config_obj = load_config_with_fallback(config, Path.cwd())
    options = config_obj.classifier_options()
    if skip_ignored_removals:
        options = dataclasses.replace(options, removal_skips_ignored=True)
    classifier = Classifier(options)

    try:
        with open(batch_path, 'r', encoding='utf-8') as f:
            batches = parse_batches(json.load(f))
    except (json.JSONDecodeError, KeyError, ValueError) as e:
        click.echo(f"{Fore.RED}Error reading batch file: {e}{Style.RESET_ALL}")
        sys.exit(1)

    results = [classifier(batch) for batch in batches]

    if output_format == 'json':
        click.echo(json.dumps([result.to_dict() for result in results], indent=2))
    else:
        for result in results:
            click.echo(format_output(result, verbose=True))
