"""Cylinder/track/megabyte conversion for DASD geometry profiles.

All conversions pass through a track count. Non-positive or non-finite
magnitudes and unrecognized unit tokens yield 0; an unknown device type
raises UnknownDeviceTypeError.
"""
import math
from typing import Dict, List, Optional, Union

from dasdcalc.core.logger import get_logger
from dasdcalc.core.units import BYTES_PER_MB
from dasdcalc.models.geometry import DEVICE_TYPES, DeviceGeometry, GeometryUnit

logger = get_logger(__name__)

UnitLike = Union[GeometryUnit, str]


class UnknownDeviceTypeError(KeyError):
    """Raised when a device type key is not in the catalog."""

    def __init__(self, device_type: str):
        self.device_type = device_type
        self.known = list(DEVICE_TYPES)
        super().__init__(device_type)

    def __str__(self) -> str:
        return (
            f"Unknown device type '{self.device_type}'. "
            f"Known types: {', '.join(self.known)}"
        )


def get_device(device_type: Union[str, int]) -> DeviceGeometry:
    """Look up a device geometry by key."""
    key = str(device_type)
    try:
        return DEVICE_TYPES[key]
    except KeyError:
        raise UnknownDeviceTypeError(key) from None


def list_devices() -> List[DeviceGeometry]:
    """Return the catalog ordered by key."""
    return [DEVICE_TYPES[key] for key in sorted(DEVICE_TYPES)]


def cylinders_to_tracks(cylinders: float, device_type: str) -> float:
    return cylinders * get_device(device_type).tracks_per_cylinder


def tracks_to_cylinders(tracks: float, device_type: str) -> float:
    return tracks / get_device(device_type).tracks_per_cylinder


def megabytes_to_tracks(megabytes: float, device_type: str) -> float:
    return (megabytes * BYTES_PER_MB) / get_device(device_type).bytes_per_track


def tracks_to_megabytes(tracks: float, device_type: str) -> float:
    return (tracks * get_device(device_type).bytes_per_track) / BYTES_PER_MB


def _parse_unit(unit: Optional[UnitLike]) -> Optional[GeometryUnit]:
    if isinstance(unit, GeometryUnit):
        return unit
    try:
        return GeometryUnit(unit)
    except ValueError:
        return None


def _positive_magnitude(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def convert(
    value: Optional[float],
    from_unit: UnitLike,
    to_unit: UnitLike,
    device_type: Union[str, int],
) -> float:
    """Convert a quantity between CYL, TRKS and MO for a device type.

    Args:
        value: Magnitude to convert
        from_unit: Source unit (GeometryUnit or its token)
        to_unit: Target unit (GeometryUnit or its token)
        device_type: Catalog key such as "3390"

    Returns:
        Converted magnitude, or 0 for non-positive input or unknown units

    Raises:
        UnknownDeviceTypeError: If device_type is not in the catalog
    """
    magnitude = _positive_magnitude(value)
    if magnitude is None:
        logger.debug(f"Nothing to convert for value {value!r}")
        return 0

    device = get_device(device_type)
    src = _parse_unit(from_unit)
    dst = _parse_unit(to_unit)
    if src is None or dst is None:
        logger.debug(f"Unrecognized unit pair {from_unit!r} -> {to_unit!r}")
        return 0

    if src is GeometryUnit.CYL:
        tracks = cylinders_to_tracks(magnitude, device.key)
    elif src is GeometryUnit.MO:
        tracks = megabytes_to_tracks(magnitude, device.key)
    else:
        tracks = magnitude

    if dst is GeometryUnit.CYL:
        return tracks_to_cylinders(tracks, device.key)
    if dst is GeometryUnit.MO:
        return tracks_to_megabytes(tracks, device.key)
    return tracks


def convert_all(
    value: Optional[float],
    from_unit: UnitLike,
    device_type: Union[str, int],
) -> Dict[GeometryUnit, float]:
    """Express a quantity in every geometry unit."""
    return {
        unit: convert(value, from_unit, unit, device_type)
        for unit in GeometryUnit
    }
