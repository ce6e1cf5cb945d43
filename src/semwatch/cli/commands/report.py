"""
Report command for SemWatch CLI
"""

import json
import sys
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import click
from colorama import Fore, Style

from semwatch.cli.utils import EVENT_COLORS, check_file_exists

EVENT_TYPES = ['create', 'modify', 'delete', 'rename', 'move', 'unknown', 'degraded']


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO timestamp as naive local time, or None if it is not one

    The log is written with naive local timestamps; offset-aware values are
    converted to local time so the two can be compared.
    """
    if not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def filter_since(events: List[Dict], since_date: datetime) -> List[Dict]:
    """Keep records at or after since_date; records without a usable timestamp are dropped"""
    kept = []
    for event in events:
        timestamp = parse_timestamp(event.get('timestamp'))
        if timestamp is not None and timestamp >= since_date:
            kept.append(event)
    return kept


def read_log(log_path: Path) -> List[Dict]:
    """Read a JSON-lines event log, skipping lines that are not JSON objects"""
    events = []
    with open(log_path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError:
                continue
            if isinstance(record, dict):
                events.append(record)
    return events


@click.command()
@click.argument('log_file', type=click.Path(), default='semwatch.log', required=False)
@click.option('--format', 'output_format', type=click.Choice(['json', 'table', 'csv']),
              default='table', help='Output format')
@click.option('--filter-type', type=click.Choice(EVENT_TYPES + ['all']),
              default='all', help='Filter by event type')
@click.option('--since', help='Show events since date (YYYY-MM-DD)')
def report_command(log_file: str, output_format: str, filter_type: str, since: Optional[str]):
    """Generate a report from an event log written by 'watch --output'.

    LOG_FILE: Path to the log file to analyze (default: semwatch.log)
    """
    log_path = Path(log_file).resolve()
    if not check_file_exists(log_path, "log file"):
        sys.exit(1)

    try:
        events = read_log(log_path)
    except OSError as e:
        click.echo(f"{Fore.RED}Error reading log file: {e}{Style.RESET_ALL}")
        sys.exit(1)

    if since:
        since_date = parse_timestamp(since)
        if since_date is None:
            click.echo(f"{Fore.RED}Error: --since must be an ISO date (YYYY-MM-DD){Style.RESET_ALL}")
            sys.exit(1)
        events = filter_since(events, since_date)

    if filter_type != 'all':
        events = [e for e in events if e.get('type') == filter_type]

    if output_format == 'json':
        click.echo(json.dumps(events, indent=2))
    elif output_format == 'csv':
        click.echo('timestamp,type,path,old_path,new_path')
        for event in events:
            click.echo(f"{event.get('timestamp', '')},{event.get('type', '')},{event.get('path', '')},"
                       f"{event.get('old_path', '')},{event.get('new_path', '')}")
    else:  # table
        counts = Counter(e.get('type', 'unknown') for e in events)
        click.echo(f"\n{Fore.GREEN}File Events Report{Style.RESET_ALL}")
        click.echo(f"{Fore.CYAN}Total events: {len(events)}{Style.RESET_ALL}")
        for event_type in EVENT_TYPES:
            if counts[event_type]:
                click.echo(f"  {EVENT_COLORS[event_type]}{event_type}{Style.RESET_ALL}: {counts[event_type]}")
        click.echo()

        for event in events:
            timestamp = event.get('timestamp', 'Unknown')
            event_type = event.get('type', 'unknown')
            color = EVENT_COLORS.get(event_type, '')
            click.echo(f"{Fore.YELLOW}[{timestamp}]{Style.RESET_ALL} {color}{event_type.upper()}{Style.RESET_ALL}")
            if 'old_path' in event:
                click.echo(f"  {Fore.RED}From:{Style.RESET_ALL} {event['old_path']}")
                click.echo(f"  {Fore.GREEN}To:{Style.RESET_ALL} {event['new_path']}")
            elif 'path' in event:
                click.echo(f"  {event['path']}")
            elif 'errors' in event:
                for error in event['errors']:
                    click.echo(f"  {Fore.RED}{error}{Style.RESET_ALL}")
