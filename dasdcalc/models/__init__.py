"""Data models for dasdcalc."""
from dasdcalc.models.config import ConfigValidationError, SettingsFile, Thresholds
from dasdcalc.models.geometry import DEVICE_TYPES, DeviceGeometry, GeometryUnit
from dasdcalc.models.storage import (
    PERCENTAGE,
    ByteUnit,
    ExpansionResult,
    SimulationResult,
    StorageState,
    UsageLevel,
)

__all__ = [
    'DEVICE_TYPES',
    'DeviceGeometry',
    'GeometryUnit',
    'ByteUnit',
    'PERCENTAGE',
    'UsageLevel',
    'StorageState',
    'SimulationResult',
    'ExpansionResult',
    'ConfigValidationError',
    'SettingsFile',
    'Thresholds',
]
