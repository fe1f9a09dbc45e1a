"""Storage volume and simulation models."""
from dataclasses import dataclass
from enum import Enum


class ByteUnit(Enum):
    """Byte-based units understood by the normalizer."""
    BYTES = "bytes"
    MB = "mb"


# Simulator-only unit: change expressed as a share of current free space
PERCENTAGE = "percentage"


class UsageLevel(Enum):
    """Alert level for a utilization percentage."""
    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class StorageState:
    """Capacity of a volume in bytes.

    Used space is always derived from total and free, never stored.
    Free space may be negative as an intermediate projection value.
    """
    total_space: float
    free_space: float

    @classmethod
    def from_used(cls, total_space: float, used_space: float) -> "StorageState":
        """Build a state from total and used capacity."""
        return cls(total_space=total_space, free_space=total_space - used_space)

    @property
    def used_space(self) -> float:
        return self.total_space - self.free_space


@dataclass(frozen=True)
class SimulationResult:
    """Projected volume state after consuming or releasing free space."""
    projected_total_space: float
    projected_used_space: float
    projected_free_space: float
    projected_percent_used: float
    change: float         # Signed bytes applied to free space

    @property
    def over_consumed(self) -> bool:
        """True if the projection runs past the volume's capacity."""
        return self.projected_free_space < 0


@dataclass(frozen=True)
class ExpansionResult:
    """Projected volume state after growing its total capacity."""
    projected_total_space: float
    projected_percent_used: float
    projected_free_space: float
    additional_space: float   # Bytes added to total
