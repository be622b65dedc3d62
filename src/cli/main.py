"""CLI entry point for moodlog."""

import click

from cli.commands import (
    analyze,
    calendar,
    chart,
    clear,
    history,
    key,
    login,
    logout,
    serve,
    signup,
    stats,
    today,
    whoami,
    write,
)
from cli.config import load_config_model
from cli.logging_config import setup_logging


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON")
def cli(verbose: bool, json_logs: bool):
    """Moodlog - journal entries with mood scoring and stats."""
    try:
        config = load_config_model()
        level, json_mode = config.logging.level, config.logging.json_mode
        log_file = config.paths.log_file
    except ValueError:
        # Config errors are reported by the command itself
        level, json_mode, log_file = "WARNING", False, None
    if verbose:
        level = "DEBUG"
    setup_logging(json_mode=json_mode or json_logs, level=level, log_file=log_file)


for command in (
    signup,
    login,
    logout,
    whoami,
    write,
    history,
    clear,
    analyze,
    today,
    stats,
    chart,
    calendar,
    key,
    serve,
):
    cli.add_command(command)


if __name__ == "__main__":
    cli()
