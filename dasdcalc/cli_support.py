"""Shared utilities for dasdcalc CLI modules."""
from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from dasdcalc.config.loader import SettingsLoader, find_settings
from dasdcalc.core.config import DasdCalcConfig, set_config
from dasdcalc.core.logger import get_logger
from dasdcalc.models.storage import UsageLevel

logger = get_logger(__name__)

LEVEL_STYLES = {
    UsageLevel.OK: "green",
    UsageLevel.WARNING: "yellow",
    UsageLevel.CRITICAL: "red",
}


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> None:
    """Set up file logging for CLI commands.

    Args:
        log_file: Path to log file (optional)
        verbose: Enable verbose logging
    """
    from dasdcalc.core.logger import setup_file_logging as _setup_file_logging
    _setup_file_logging(log_file=log_file, verbose=verbose)


def load_runtime_config(config_path: Optional[str] = None) -> DasdCalcConfig:
    """Build the runtime config from the environment and any settings file.

    Returns:
        The config now installed as the global instance

    Raises:
        ConfigValidationError: If the settings file is missing or invalid
    """
    config = DasdCalcConfig.from_env()

    settings_file = find_settings(config_path)
    if settings_file:
        logger.debug(f"Using settings file {settings_file}")
        config = SettingsLoader(settings_file).apply(config)

    set_config(config)
    return config


def handle_cli_error(
    e: Exception,
    console: Console,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        e: Exception to handle
        console: Rich console for output
        verbose: Show exception traceback if True
        exit_code: Exit code to use
    """
    console.print(f"[red]Error:[/red] {escape(str(e))}")
    if verbose:
        console.print_exception()
    raise typer.Exit(exit_code)


def format_number(value: float, precision: int) -> str:
    """Format a magnitude with thousands separators."""
    return f"{value:,.{precision}f}"


def format_level(level: UsageLevel) -> str:
    """Colour an alert level for display."""
    style = LEVEL_STYLES[level]
    return f"[{style}]{level.value.upper()}[/{style}]"


def print_success(console: Console, message: str, prefix: str = "✓") -> None:
    """Print success message with consistent formatting.

    Args:
        console: Rich console for output
        message: Success message
        prefix: Prefix symbol (default: ✓)
    """
    console.print(f"[green]{prefix}[/green] {message}")


def print_error(console: Console, message: str, prefix: str = "✗") -> None:
    """Print error message with consistent formatting."""
    console.print(f"[red]{prefix}[/red] {message}")


def print_warning(console: Console, message: str, prefix: str = "⚠") -> None:
    """Print warning message with consistent formatting."""
    console.print(f"[yellow]{prefix}[/yellow] {message}")
