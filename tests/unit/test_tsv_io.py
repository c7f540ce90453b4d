"""Unit tests for VIN list reading and TSV serialization helpers."""

from __future__ import annotations

from pathlib import Path

from vin_pipeline.io.tsv_io import TSV_HEADER, parse_vin_lines, read_vins, write_tsv
from vin_pipeline.models import (
    Body,
    BodyLayout,
    DecodedVIN,
    DescriptorInfo,
    ManufacturerInfo,
    Series,
)


def _decoded(serial: int | None = 4352, years: tuple[int, ...] = (2003,)) -> DecodedVIN:
    return DecodedVIN(
        full="1HGCM82633A004352",
        wmi="1HGCM82633A",
        serial=serial,
        manufacturer_info=ManufacturerInfo("1HG", "Honda", "United States", "North America"),
        candidate_years=years,
        descriptor_info=DescriptorInfo(
            manufacturer="Honda",
            vds_pattern="CM8",
            model="Accord",
            body=Body("CM8", BodyLayout.SEDAN, 4, 2003, 2007),
            series=Series("EX", 2003, 2007),
        ),
    )


def test_parse_vin_lines_normalizes_and_skips_comments() -> None:
    lines = ["# intake\n", "  1hgcm82633a004352 \n", "\n", "JTEHD20V650050824\n"]

    assert parse_vin_lines(lines) == ["1HGCM82633A004352", "JTEHD20V650050824"]


def test_read_vins_from_fixture() -> None:
    path = Path(__file__).resolve().parents[1] / "fixtures" / "vins.txt"

    vins = read_vins(path)

    assert vins[0] == "1HGCM82633A004352"
    assert vins[1] == "1M8GDM9AXKP042788"
    assert len(vins) == 8


def test_write_tsv_uses_canonical_columns(tmp_path: Path) -> None:
    output = tmp_path / "out.tsv"

    write_tsv([_decoded(), _decoded(serial=None, years=(1989, 2019))], output_path=output)
    lines = output.read_text(encoding="utf-8").splitlines()

    assert lines[0].split("\t") == TSV_HEADER
    assert lines[1].split("\t") == [
        "1HGCM82633A004352",
        "1HGCM82633A",
        "4352",
        "Honda",
        "United States",
        "North America",
        "2003",
        "Accord",
        "sedan",
        "EX",
    ]
    cells = lines[2].split("\t")
    assert cells[2] == ""
    assert cells[6] == "1989/2019"


def test_write_tsv_without_header(tmp_path: Path) -> None:
    output = tmp_path / "out.tsv"

    write_tsv([_decoded()], output_path=output, include_header=False)

    assert output.read_text(encoding="utf-8").splitlines()[0].startswith("1HGCM82633A004352\t")
