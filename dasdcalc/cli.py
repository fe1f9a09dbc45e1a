#!/usr/bin/env python3
"""dasdcalc CLI - DASD geometry conversion and capacity projection."""
from typing import Optional

import typer
from rich.console import Console

from dasdcalc.cli_capacity_commands import register_capacity_commands
from dasdcalc.cli_convert_commands import register_convert_commands
from dasdcalc.cli_support import handle_cli_error, load_runtime_config, setup_file_logging
from dasdcalc.core.logger import get_logger
from dasdcalc.models.config import ConfigValidationError

app = typer.Typer(
    name="dasdcalc",
    help="""dasdcalc - DASD geometry conversion and capacity projection

Convert cylinders, tracks and megabytes for IBM 3390/3380/3350 devices,
and project how capacity changes affect a volume's utilization.

Quick start:
  dasdcalc devices                              # Supported device types
  dasdcalc convert 1 --from CYL --to MO         # One conversion
  dasdcalc usage --total 1000 --used 700        # Percent used
  dasdcalc simulate consume --total 1000 --free 400 --amount 25
""",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help="Settings file (default: search DASDCALC_CONFIG, ./dasdcalc.yml)"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging and error tracebacks"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Write logs to this file"),
):
    """Load settings before any command runs."""
    ctx.obj = {"verbose": verbose}

    if verbose or log_file:
        setup_file_logging(log_file=log_file, verbose=verbose)

    try:
        load_runtime_config(config)
    except ConfigValidationError as e:
        handle_cli_error(e, console, verbose)


# Attach modular subcommands
register_convert_commands(app, console)
register_capacity_commands(app, console)

if __name__ == "__main__":
    app()
