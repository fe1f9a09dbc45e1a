"""Tests for byte unit normalization."""
import pytest

from dasdcalc.core.units import BYTES_PER_MB, convert_unit, format_bytes
from dasdcalc.models.storage import ByteUnit


def test_bytes_per_mb():
    assert BYTES_PER_MB == 1048576


def test_identity_when_units_match():
    assert convert_unit(123.4, "mb", "mb") == 123.4
    assert convert_unit(5, "bytes", "bytes") == 5


def test_bytes_to_mb():
    assert convert_unit(2 * 1048576, "bytes", "mb") == 2


def test_mb_to_bytes():
    assert convert_unit(100, "mb", "bytes") == 100 * 1048576


def test_enum_members_accepted():
    assert convert_unit(1, ByteUnit.MB, ByteUnit.BYTES) == 1048576
    assert convert_unit(1048576, ByteUnit.BYTES, "mb") == 1


@pytest.mark.parametrize("from_unit,to_unit", [
    ("gb", "bytes"),
    ("mb", "percentage"),
    ("CYL", "MO"),
])
def test_unknown_pair_passes_value_through(from_unit, to_unit):
    """Unrecognized pairs return the value unchanged."""
    assert convert_unit(42, from_unit, to_unit) == 42


@pytest.mark.parametrize("num_bytes,expected", [
    (512, "512.00 B"),
    (1536, "1.50 KB"),
    (100 * 1048576, "100.00 MB"),
    (3 * 1024 ** 4, "3.00 TB"),
    (2 * 1024 ** 5, "2.00 PB"),
])
def test_format_bytes(num_bytes, expected):
    assert format_bytes(num_bytes) == expected


def test_format_bytes_precision():
    assert format_bytes(1536, precision=0) == "2 KB"
