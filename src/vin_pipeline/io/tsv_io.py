"""TSV read/write helpers for VIN input lists and decoded output."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

from vin_pipeline.models import DecodedVIN

TSV_HEADER = [
    "full",
    "wmi",
    "serial",
    "manufacturer",
    "country",
    "region",
    "candidate_years",
    "model",
    "body_layout",
    "series_spec",
]


def normalize_vin(value: str) -> str:
    """Strip surrounding whitespace and upper-case a VIN read from input."""

    return value.strip().upper()


def parse_vin_lines(lines: Iterable[str]) -> list[str]:
    """Extract VINs from lines, one per line, skipping blanks and ``#`` comments."""

    vins: list[str] = []
    for line in lines:
        value = normalize_vin(line)
        if not value or value.startswith("#"):
            continue
        vins.append(value)
    return vins


def read_vins(path: Path) -> list[str]:
    """Read a VIN list file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
    """

    with path.open("r", encoding="utf-8") as handle:
        return parse_vin_lines(handle)


def decoded_to_cells(row: DecodedVIN) -> list[str]:
    """Render one decoded VIN in canonical column order."""

    return [
        row.full,
        row.wmi,
        "" if row.serial is None else str(row.serial),
        row.manufacturer_info.manufacturer,
        row.manufacturer_info.country,
        row.manufacturer_info.region,
        "/".join(str(year) for year in row.candidate_years),
        row.descriptor_info.model,
        row.descriptor_info.body.layout.value,
        row.descriptor_info.series.spec,
    ]


def write_tsv(rows: Sequence[DecodedVIN], output_path: Path, include_header: bool = True) -> None:
    """Write decoded VINs to a TSV file using the canonical column order.

    Args:
        rows: Decoded VINs to serialize.
        output_path: Destination TSV file path.
        include_header: Whether to include a header row.
    """

    with output_path.open("w", encoding="utf-8") as handle:
        if include_header:
            handle.write("\t".join(TSV_HEADER))
            handle.write("\n")
        for row in rows:
            handle.write("\t".join(decoded_to_cells(row)))
            handle.write("\n")
