"""Repository for vehicle descriptor (body/series) reference data."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import Sequence

from vin_pipeline.errors import DescriptorNotFoundError, ReferenceDataError
from vin_pipeline.models import Body, BodyLayout, DescriptorInfo, ManufacturerInfo, Series
from vin_pipeline.reference.parser import ReferenceRow, read_reference_file
from vin_pipeline.tables import CHECK_DIGIT_INDEX

logger = logging.getLogger(__name__)

DESCRIPTOR_COLUMNS = (
    "manufacturer",
    "vds_pattern",
    "model",
    "body_code",
    "body_layout",
    "doors",
    "series_spec",
    "start_year",
    "end_year",
    "series_start_year",
    "series_end_year",
)
REQUIRED_DESCRIPTOR_COLUMNS = (
    "manufacturer",
    "vds_pattern",
    "model",
    "body_layout",
    "doors",
    "start_year",
    "end_year",
)
VDS_START_INDEX = 3
VDS_PATTERN_LENGTH = CHECK_DIGIT_INDEX - VDS_START_INDEX
WILDCARD = "*"


def pattern_matches(pattern: str, vds: str) -> bool:
    """Return whether a VDS pattern matches the descriptor characters.

    Patterns compare position by position from VIN position 3; ``*`` matches
    any character and a pattern shorter than five characters matches as a
    prefix.
    """

    if len(pattern) > len(vds):
        return False
    return all(p == WILDCARD or p == c for p, c in zip(pattern, vds))


def pattern_specificity(pattern: str) -> int:
    """Count literal (non-wildcard) characters in a VDS pattern."""

    return sum(1 for char in pattern if char != WILDCARD)


def _parse_int(row: ReferenceRow, column: str, path: Path) -> int:
    value = row.get(column)
    try:
        return int(value)
    except ValueError:
        raise ReferenceDataError(path, row.line_number, f"{column} {value!r} is not an integer") from None


def _parse_optional_int(row: ReferenceRow, column: str, path: Path, default: int) -> int:
    if not row.get(column):
        return default
    return _parse_int(row, column, path)


def _parse_layout(row: ReferenceRow, path: Path) -> BodyLayout:
    value = row.get("body_layout").lower().replace(" ", "_").replace("-", "_")
    try:
        return BodyLayout(value)
    except ValueError:
        raise ReferenceDataError(
            path, row.line_number, f"unknown body_layout {row.get('body_layout')!r}"
        ) from None


@dataclass(frozen=True)
class DescriptorRepository:
    """Read-only descriptor lookup backed by a TSV file.

    Rows are grouped by manufacturer name. A row applies to a VIN when its
    VDS pattern matches positions 3-7 and its production years include one
    of the candidate model years.
    """

    path: Path

    @cached_property
    def entries(self) -> tuple[DescriptorInfo, ...]:
        """Load and cache descriptor rows from disk.

        Raises:
            FileNotFoundError: If the configured file does not exist.
            ReferenceDataError: If a row is malformed.
        """

        entries: list[DescriptorInfo] = []
        for row in read_reference_file(
            self.path, DESCRIPTOR_COLUMNS, required=REQUIRED_DESCRIPTOR_COLUMNS
        ):
            manufacturer = row.get("manufacturer")
            pattern = row.get("vds_pattern").upper()
            if not manufacturer or not pattern:
                raise ReferenceDataError(
                    self.path, row.line_number, "manufacturer and vds_pattern are required"
                )
            if len(pattern) > VDS_PATTERN_LENGTH:
                raise ReferenceDataError(
                    self.path,
                    row.line_number,
                    f"vds_pattern {pattern!r} longer than {VDS_PATTERN_LENGTH} characters",
                )
            start_year = _parse_int(row, "start_year", self.path)
            end_year = _parse_int(row, "end_year", self.path)
            if end_year < start_year:
                raise ReferenceDataError(
                    self.path, row.line_number, f"end_year {end_year} before start_year {start_year}"
                )
            series_start = _parse_optional_int(row, "series_start_year", self.path, start_year)
            series_end = _parse_optional_int(row, "series_end_year", self.path, end_year)
            if series_end < series_start:
                raise ReferenceDataError(
                    self.path,
                    row.line_number,
                    f"series_end_year {series_end} before series_start_year {series_start}",
                )

            entries.append(
                DescriptorInfo(
                    manufacturer=manufacturer,
                    vds_pattern=pattern,
                    model=row.get("model"),
                    body=Body(
                        code=row.get("body_code"),
                        layout=_parse_layout(row, self.path),
                        doors=_parse_int(row, "doors", self.path),
                        start_year=start_year,
                        end_year=end_year,
                    ),
                    series=Series(
                        spec=row.get("series_spec"),
                        start_year=series_start,
                        end_year=series_end,
                    ),
                )
            )

        logger.info("Loaded %d vehicle descriptors from %s", len(entries), self.path)
        return tuple(entries)

    @cached_property
    def entries_by_manufacturer(self) -> dict[str, tuple[DescriptorInfo, ...]]:
        """Build and cache a manufacturer-indexed descriptor map."""

        mapping: dict[str, list[DescriptorInfo]] = {}
        for entry in self.entries:
            mapping.setdefault(entry.manufacturer.casefold(), []).append(entry)
        return {name: tuple(items) for name, items in mapping.items()}

    def find_descriptor(
        self,
        manufacturer: ManufacturerInfo,
        prefix: str,
        candidate_years: Sequence[int],
    ) -> DescriptorInfo:
        """Return the most specific descriptor matching a decoded prefix.

        When ``candidate_years`` is empty no year filter is applied, since an
        empty candidate list is a valid decode outcome.

        Args:
            manufacturer: Manufacturer resolved for the prefix.
            prefix: 11-character WMI/VDS prefix.
            candidate_years: Plausible model years.

        Returns:
            The descriptor with the most literal pattern characters; ties go
            to the latest production start.

        Raises:
            DescriptorNotFoundError: If no descriptor matches.
        """

        vds = prefix[VDS_START_INDEX:CHECK_DIGIT_INDEX].upper()
        candidates = [
            entry
            for entry in self.entries_by_manufacturer.get(manufacturer.manufacturer.casefold(), ())
            if pattern_matches(entry.vds_pattern, vds)
            and (not candidate_years or any(entry.covers_year(year) for year in candidate_years))
        ]
        if not candidates:
            raise DescriptorNotFoundError(manufacturer.manufacturer, prefix, candidate_years)

        return max(
            candidates,
            key=lambda entry: (pattern_specificity(entry.vds_pattern), entry.body.start_year),
        )
