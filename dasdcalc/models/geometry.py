"""DASD geometry models."""
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class GeometryUnit(Enum):
    """Addressing unit of a fixed-block device."""
    CYL = "CYL"      # Cylinders
    TRKS = "TRKS"    # Tracks
    MO = "MO"        # Megabytes


@dataclass(frozen=True)
class DeviceGeometry:
    """Addressing layout of one device model."""
    key: str                  # 3390
    name: str                 # IBM 3390
    tracks_per_cylinder: int
    bytes_per_track: int

    def __post_init__(self):
        if self.tracks_per_cylinder <= 0 or self.bytes_per_track <= 0:
            raise ValueError(
                f"Device {self.key} needs positive geometry, got "
                f"{self.tracks_per_cylinder} trk/cyl and {self.bytes_per_track} bytes/trk"
            )

    @property
    def bytes_per_cylinder(self) -> int:
        """Bytes held by one full cylinder."""
        return self.tracks_per_cylinder * self.bytes_per_track


DEVICE_TYPES: Mapping[str, DeviceGeometry] = MappingProxyType({
    '3390': DeviceGeometry('3390', 'IBM 3390', tracks_per_cylinder=15, bytes_per_track=56664),
    '3380': DeviceGeometry('3380', 'IBM 3380', tracks_per_cylinder=15, bytes_per_track=47476),
    '3350': DeviceGeometry('3350', 'IBM 3350', tracks_per_cylinder=30, bytes_per_track=19254),
})
