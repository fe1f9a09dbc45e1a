"""Capacity CLI commands - usage, simulate consume, simulate expand."""
import json
from enum import Enum

import typer
from rich.console import Console
from rich.progress_bar import ProgressBar
from rich.table import Table

from dasdcalc.cli_support import (
    format_level,
    format_number,
    print_error,
    print_success,
    print_warning,
)
from dasdcalc.core.config import DasdCalcConfig, get_config
from dasdcalc.core.logger import get_logger
from dasdcalc.core.units import convert_unit, format_bytes
from dasdcalc.core.utilization import (
    free_space,
    simulate,
    simulate_expansion,
    usage_level,
    usage_percent,
)
from dasdcalc.models.storage import PERCENTAGE, ByteUnit, StorageState, UsageLevel

logger = get_logger(__name__)

SimulateTyper = typer.Typer(help="Project capacity changes on a volume")

# Module-level console instance (will be set by register function)
console: Console = Console()


class ConsumeUnit(Enum):
    """Units accepted by 'simulate consume'."""
    PERCENTAGE = PERCENTAGE
    MB = ByteUnit.MB.value
    BYTES = ByteUnit.BYTES.value


def _to_bytes(value: float, unit: ByteUnit) -> float:
    return convert_unit(value, unit, ByteUnit.BYTES)


def _show(num_bytes: float, unit: ByteUnit, config: DasdCalcConfig) -> str:
    """Render a byte count in the caller's unit plus a human size."""
    shown = convert_unit(num_bytes, ByteUnit.BYTES, unit)
    return (
        f"{format_number(shown, config.precision)} {unit.value.upper()} "
        f"[dim]({format_bytes(num_bytes, config.precision)})[/dim]"
    )


def _report_level(percent: float, config: DasdCalcConfig) -> UsageLevel:
    level = usage_level(percent, config.warning_threshold, config.critical_threshold)
    bar = ProgressBar(
        total=100,
        completed=min(max(percent, 0), 100),
        width=40,
        complete_style={
            UsageLevel.OK: "green",
            UsageLevel.WARNING: "yellow",
            UsageLevel.CRITICAL: "red",
        }[level],
    )
    console.print(bar)

    if level is UsageLevel.CRITICAL:
        print_error(console, f"Utilization at or above {config.critical_threshold:g}%")
    elif level is UsageLevel.WARNING:
        print_warning(console, f"Utilization at or above {config.warning_threshold:g}%")
    else:
        print_success(console, f"Utilization below {config.warning_threshold:g}%")
    return level


def usage(
    total: float = typer.Option(..., "--total", help="Total capacity"),
    used: float = typer.Option(..., "--used", help="Used capacity"),
    unit: ByteUnit = typer.Option(ByteUnit.MB, "--unit", "-u", case_sensitive=False, help="Unit of --total/--used"),
    as_json: bool = typer.Option(False, "--json", help="Output machine-readable JSON"),
):
    """Show percent used and free space for a volume."""
    config = get_config()
    total_bytes = _to_bytes(total, unit)
    used_bytes = _to_bytes(used, unit)

    percent = usage_percent(used_bytes, total_bytes)
    free_bytes = free_space(total_bytes, used_bytes)
    level = usage_level(percent, config.warning_threshold, config.critical_threshold)

    if as_json:
        console.print(json.dumps({
            "total_space": total_bytes,
            "used_space": used_bytes,
            "free_space": free_bytes,
            "percent_used": percent,
            "level": level.value,
        }, indent=2))
        return

    table = Table(title="Volume Utilization", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Total", _show(total_bytes, unit, config))
    table.add_row("Used", _show(used_bytes, unit, config))
    table.add_row("Free", _show(free_bytes, unit, config))
    table.add_row("Percent used", f"{percent:.{config.precision}f}%")
    table.add_row("Level", format_level(level))
    console.print(table)
    _report_level(percent, config)


@SimulateTyper.command("consume")
def simulate_consume(
    total: float = typer.Option(..., "--total", help="Total capacity (MB)"),
    free: float = typer.Option(..., "--free", help="Free capacity (MB)"),
    amount: float = typer.Option(..., "--amount", help="Size of the change"),
    unit: ConsumeUnit = typer.Option(
        ConsumeUnit.PERCENTAGE, "--unit", "-u", case_sensitive=False,
        help="percentage of free space, or an absolute mb/bytes amount added to free space",
    ),
    as_json: bool = typer.Option(False, "--json", help="Output machine-readable JSON"),
):
    """Project usage after consuming or releasing free space.

    Total capacity stays fixed. With --unit percentage the amount is the
    share of current free space consumed.

    Examples:
        dasdcalc simulate consume --total 1000 --free 400 --amount 25
        dasdcalc simulate consume --total 1000 --free 400 --amount 100 --unit mb
    """
    config = get_config()
    state = StorageState(
        total_space=_to_bytes(total, ByteUnit.MB),
        free_space=_to_bytes(free, ByteUnit.MB),
    )
    result = simulate(state, amount, unit.value)
    logger.debug(f"simulate consume {amount} {unit.value}: {result}")

    if as_json:
        console.print(json.dumps({
            "projected_total_space": result.projected_total_space,
            "projected_used_space": result.projected_used_space,
            "projected_free_space": result.projected_free_space,
            "projected_percent_used": result.projected_percent_used,
            "change": result.change,
        }, indent=2))
        return

    table = Table(title="Usage Projection", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Current", justify="right")
    table.add_column("Projected", justify="right")
    table.add_row(
        "Total",
        _show(state.total_space, ByteUnit.MB, config),
        _show(result.projected_total_space, ByteUnit.MB, config),
    )
    table.add_row(
        "Used",
        _show(state.used_space, ByteUnit.MB, config),
        _show(result.projected_used_space, ByteUnit.MB, config),
    )
    table.add_row(
        "Free",
        _show(state.free_space, ByteUnit.MB, config),
        # Negative free space is shown as zero
        _show(max(0, result.projected_free_space), ByteUnit.MB, config),
    )
    table.add_row(
        "Percent used",
        f"{usage_percent(state.used_space, state.total_space):.{config.precision}f}%",
        f"{result.projected_percent_used:.{config.precision}f}%",
    )
    table.add_row("Change", "", _show(result.change, ByteUnit.MB, config))
    console.print(table)

    if result.over_consumed:
        print_warning(
            console,
            f"Projection over-consumes the volume by {_show(-result.projected_free_space, ByteUnit.MB, config)}",
        )
    _report_level(result.projected_percent_used, config)


@SimulateTyper.command("expand")
def simulate_expand(
    total: float = typer.Option(..., "--total", help="Current total capacity"),
    used: float = typer.Option(..., "--used", help="Used capacity"),
    amount: float = typer.Option(0, "--amount", help="Capacity to add"),
    unit: ByteUnit = typer.Option(ByteUnit.MB, "--unit", "-u", case_sensitive=False, help="Unit of all sizes"),
    percent: float = typer.Option(0, "--percent", "-p", help="Extra capacity as a percent of current total"),
    as_json: bool = typer.Option(False, "--json", help="Output machine-readable JSON"),
):
    """Project usage after growing a volume's capacity.

    Examples:
        dasdcalc simulate expand --total 1000 --used 900 --amount 500
        dasdcalc simulate expand --total 1000 --used 900 --percent 20
    """
    config = get_config()
    if amount <= 0 and percent <= 0:
        console.print("[red]Error:[/red] Give a positive --amount or --percent")
        raise typer.Exit(1)

    state = StorageState.from_used(_to_bytes(total, unit), _to_bytes(used, unit))
    result = simulate_expansion(state, amount, unit, percent)
    logger.debug(f"simulate expand {amount} {unit.value} +{percent}%: {result}")

    if as_json:
        console.print(json.dumps({
            "projected_total_space": result.projected_total_space,
            "projected_percent_used": result.projected_percent_used,
            "projected_free_space": result.projected_free_space,
            "additional_space": result.additional_space,
        }, indent=2))
        return

    table = Table(title="Expansion Projection", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Current", justify="right")
    table.add_column("Projected", justify="right")
    table.add_row(
        "Total",
        _show(state.total_space, unit, config),
        _show(result.projected_total_space, unit, config),
    )
    table.add_row(
        "Free",
        _show(free_space(state.total_space, state.used_space), unit, config),
        _show(result.projected_free_space, unit, config),
    )
    table.add_row(
        "Percent used",
        f"{usage_percent(state.used_space, state.total_space):.{config.precision}f}%",
        f"{result.projected_percent_used:.{config.precision}f}%",
    )
    table.add_row("Added", "", _show(result.additional_space, unit, config))
    console.print(table)
    _report_level(result.projected_percent_used, config)


def register_capacity_commands(root: typer.Typer, shared_console: Console) -> None:
    """Attach utilization and simulation commands to the main CLI."""
    global console
    console = shared_console

    root.command()(usage)
    root.add_typer(SimulateTyper, name="simulate")
