"""Geometry CLI commands - devices, convert."""
import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from dasdcalc.cli_support import format_number, handle_cli_error
from dasdcalc.core.config import get_config
from dasdcalc.core.geometry import (
    UnknownDeviceTypeError,
    convert,
    convert_all,
    get_device,
    list_devices,
)
from dasdcalc.core.logger import get_logger
from dasdcalc.models.geometry import GeometryUnit

logger = get_logger(__name__)

# Module-level console instance (will be set by register function)
console: Console = Console()

UNIT_LABELS = {
    GeometryUnit.CYL: "Cylinders",
    GeometryUnit.TRKS: "Tracks",
    GeometryUnit.MO: "Megabytes",
}


def devices():
    """List the supported device geometry profiles."""
    table = Table(title="Device Types", show_header=True)
    table.add_column("Type", style="cyan")
    table.add_column("Name")
    table.add_column("Tracks/Cyl", justify="right")
    table.add_column("Bytes/Track", justify="right")
    table.add_column("Bytes/Cyl", justify="right")

    for device in list_devices():
        table.add_row(
            device.key,
            device.name,
            str(device.tracks_per_cylinder),
            f"{device.bytes_per_track:,}",
            f"{device.bytes_per_cylinder:,}",
        )

    console.print(table)


def convert_command(
    ctx: typer.Context,
    value: float = typer.Argument(..., help="Quantity to convert"),
    from_unit: GeometryUnit = typer.Option(
        ..., "--from", "-f", case_sensitive=False, help="Source unit (CYL, TRKS, MO)"
    ),
    to_unit: Optional[GeometryUnit] = typer.Option(
        None, "--to", "-t", case_sensitive=False, help="Target unit (CYL, TRKS, MO)"
    ),
    device: Optional[str] = typer.Option(
        None, "--device", "-d", help="Device type (defaults to configured device)"
    ),
    all_units: bool = typer.Option(False, "--all", "-a", help="Show the value in every unit"),
    as_json: bool = typer.Option(False, "--json", help="Output machine-readable JSON"),
):
    """Convert between cylinders, tracks and megabytes.

    Examples:
        dasdcalc convert 1 --from CYL --to TRKS
        dasdcalc convert 500 --from MO --to CYL --device 3380
        dasdcalc convert 3339 --from CYL --all
        dasdcalc convert --from CYL --to MO -- -5    # negative values follow --
    """
    config = get_config()
    verbose = bool((ctx.obj or {}).get("verbose"))
    device_type = device or config.default_device

    if to_unit is None and not all_units:
        console.print("[red]Error:[/red] Give a target unit with --to or use --all")
        raise typer.Exit(1)

    try:
        geometry = get_device(device_type)
        if all_units:
            results = convert_all(value, from_unit, geometry.key)
        else:
            results = {to_unit: convert(value, from_unit, to_unit, geometry.key)}
    except UnknownDeviceTypeError as e:
        handle_cli_error(e, console, verbose)

    logger.debug(f"convert {value} {from_unit.value} on {geometry.key}: {results}")

    if as_json:
        payload = {
            "device": geometry.key,
            "value": value,
            "from": from_unit.value,
            "results": {unit.value: result for unit, result in results.items()},
        }
        console.print(json.dumps(payload, indent=2))
        return

    if value <= 0:
        console.print("[dim]Non-positive quantity; nothing to convert.[/dim]")

    if len(results) == 1:
        unit, result = next(iter(results.items()))
        console.print(
            f"{format_number(value, config.precision)} {from_unit.value} = "
            f"[bold]{format_number(result, config.precision)} {unit.value}[/bold] "
            f"on {geometry.name}"
        )
        return

    table = Table(title=f"{format_number(value, config.precision)} {from_unit.value} on {geometry.name}")
    table.add_column("Unit", style="cyan")
    table.add_column("Value", justify="right")
    for unit, result in results.items():
        table.add_row(f"{UNIT_LABELS[unit]} ({unit.value})", format_number(result, config.precision))
    console.print(table)


def register_convert_commands(
    app: typer.Typer,
    shared_console: Console,
):
    """Register geometry commands with the main Typer app.

    Args:
        app: Main Typer application
        shared_console: Shared Rich console instance
    """
    global console
    console = shared_console

    app.command()(devices)
    app.command(name="convert")(convert_command)
