"""Byte unit normalization."""
from typing import Union

from dasdcalc.models.storage import ByteUnit

BYTES_PER_MB = 1024 * 1024

UnitLike = Union[ByteUnit, str]


def _token(unit: UnitLike) -> str:
    return unit.value if isinstance(unit, ByteUnit) else unit


def convert_unit(value: float, from_unit: UnitLike, to_unit: UnitLike) -> float:
    """Convert a magnitude between raw bytes and megabytes.

    Any pair other than bytes<->mb returns the value unchanged.
    """
    src, dst = _token(from_unit), _token(to_unit)
    if src == dst:
        return value
    if src == ByteUnit.BYTES.value and dst == ByteUnit.MB.value:
        return value / BYTES_PER_MB
    if src == ByteUnit.MB.value and dst == ByteUnit.BYTES.value:
        return value * BYTES_PER_MB
    return value


def format_bytes(num_bytes: float, precision: int = 2) -> str:
    """Human-readable size using binary multiples."""
    size = float(num_bytes)
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if abs(size) < 1024:
            return f"{size:.{precision}f} {unit}"
        size /= 1024
    return f"{size:.{precision}f} PB"
