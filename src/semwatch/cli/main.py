#!/usr/bin/env python3
"""
SemWatch CLI - Main entry point
"""

import click
from colorama import init

from semwatch.cli.commands.watch import watch_command, watch_alias
from semwatch.cli.commands.classify import classify_command
from semwatch.cli.commands.init_config import init_config_command
from semwatch.cli.commands.report import report_command

# Initialize colorama for cross-platform colored output
init()


@click.group()
@click.version_option(package_name='semwatch')
def main():
    """SemWatch - Turn noisy filesystem notifications into semantic file events.

    Common workflows:

      # Watch the current directory and print what happens
      semwatch watch

      # Keep a log and summarize it later
      semwatch watch ./inbox --output semwatch.log
      semwatch report semwatch.log

      # Replay recorded raw events through the classifier
      semwatch classify batches.json

    Use 'semwatch COMMAND --help' for detailed help on any command.
    """
    pass


main.add_command(watch_command, name='watch')
main.add_command(classify_command, name='classify')
main.add_command(init_config_command, name='init-config')
main.add_command(report_command, name='report')

main.add_command(watch_alias, name='w')


if __name__ == '__main__':
    main()
