"""Storage utilization and capacity-change projection."""
import math
from typing import Optional, Union

from dasdcalc.core.units import convert_unit
from dasdcalc.models.storage import (
    PERCENTAGE,
    ByteUnit,
    ExpansionResult,
    SimulationResult,
    StorageState,
    UsageLevel,
)

DEFAULT_WARNING_THRESHOLD = 75.0
DEFAULT_CRITICAL_THRESHOLD = 90.0

ChangeUnit = Union[ByteUnit, str]


def _finite(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def usage_percent(used: Optional[float], total: Optional[float]) -> float:
    """Percent of total capacity in use.

    Returns 0 when total is missing, non-finite or not positive, or when
    used is missing or non-finite. The result is not clamped, so
    over-committed volumes report more than 100.
    """
    used_value = _finite(used)
    total_value = _finite(total)
    if used_value is None or total_value is None or total_value <= 0:
        return 0
    return (used_value / total_value) * 100


def free_space(total: float, used: float) -> float:
    """Remaining capacity, never below zero."""
    return max(0, total - used)


def usage_level(
    percent: float,
    warning: float = DEFAULT_WARNING_THRESHOLD,
    critical: float = DEFAULT_CRITICAL_THRESHOLD,
) -> UsageLevel:
    """Map a utilization percentage onto an alert level."""
    if percent >= critical:
        return UsageLevel.CRITICAL
    if percent >= warning:
        return UsageLevel.WARNING
    return UsageLevel.OK


def simulate(state: StorageState, change_amount: float, change_unit: ChangeUnit) -> SimulationResult:
    """Project a change in free space onto a volume with fixed capacity.

    With the ``percentage`` unit the change consumes that share of the
    current free space. With a byte unit the amount is added to free space,
    so positive values release space and negative values consume it.

    Projected free space is not clamped and may go negative.
    """
    if change_unit == PERCENTAGE:
        change = -(state.free_space * change_amount) / 100
    else:
        change = convert_unit(change_amount, change_unit, ByteUnit.BYTES)

    new_free = state.free_space + change
    new_used = state.total_space - new_free

    return SimulationResult(
        projected_total_space=state.total_space,
        projected_used_space=new_used,
        projected_free_space=new_free,
        projected_percent_used=usage_percent(new_used, state.total_space),
        change=change,
    )


simulate_consumption = simulate


def simulate_expansion(
    state: StorageState,
    additional_space: float,
    unit: ChangeUnit,
    percent_to_add: float = 0,
) -> ExpansionResult:
    """Project growing a volume's total capacity.

    ``percent_to_add`` adds that share of the current total on top of
    ``additional_space``. Used space stays the same.
    """
    additional = convert_unit(additional_space, unit, ByteUnit.BYTES)
    if percent_to_add > 0:
        additional += (state.total_space * percent_to_add) / 100

    new_total = state.total_space + additional
    used = state.used_space

    return ExpansionResult(
        projected_total_space=new_total,
        projected_percent_used=usage_percent(used, new_total),
        projected_free_space=free_space(new_total, used),
        additional_space=additional,
    )
