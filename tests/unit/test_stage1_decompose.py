"""Unit tests for Stage 1 positional decomposition."""

from __future__ import annotations

import pytest

from vin_pipeline.errors import LengthError
from vin_pipeline.stages.stage1_decompose import decompose_vin, parse_serial, vin_sections


def test_decompose_golden_vin() -> None:
    assert decompose_vin("1HGCM82633A004352") == ("1HGCM82633A", 4352)


@pytest.mark.parametrize(
    ("prefix", "serial_text", "serial"),
    [
        ("1M8GDM9AXKP", "042788", 42788),
        ("JTEHD20V650", "000000", 0),
        ("WBAAA1305H8", "999999", 999999),
    ],
)
def test_decompose_recovers_constructed_prefix_and_serial(
    prefix: str, serial_text: str, serial: int
) -> None:
    assert decompose_vin(prefix + serial_text) == (prefix, serial)


@pytest.mark.parametrize("serial_text", ["00435A", "ABCDEF", "12 456", "+12345", "١٢٣٤٥٦"])
def test_non_numeric_serial_is_absent(serial_text: str) -> None:
    assert parse_serial(serial_text) is None


def test_decompose_non_numeric_serial_keeps_prefix() -> None:
    assert decompose_vin("1HGCM82613A00435A") == ("1HGCM82613A", None)


def test_decompose_rejects_wrong_length() -> None:
    with pytest.raises(LengthError) as excinfo:
        decompose_vin("1HGCM826")

    assert excinfo.value.length == 8
    assert excinfo.value.stage == "validate"


def test_vin_sections_rejects_wrong_length() -> None:
    with pytest.raises(LengthError, match="got 18"):
        vin_sections("1HGCM82633A0043521")


def test_vin_sections_names_every_section() -> None:
    sections = vin_sections("1HGCM82633A004352")

    assert sections.wmi == "1HG"
    assert sections.vds == "CM8263"
    assert sections.check_digit == "3"
    assert sections.year_code == "3"
    assert sections.plant_code == "A"
    assert sections.vis == "3A004352"
    assert sections.serial_text == "004352"
