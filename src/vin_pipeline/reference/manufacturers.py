"""Repository for World Manufacturer Identifier reference data."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path

from vin_pipeline.errors import ManufacturerNotFoundError, ReferenceDataError
from vin_pipeline.models import ManufacturerInfo
from vin_pipeline.reference.parser import read_reference_file
from vin_pipeline.tables import SERIAL_START_INDEX, region_for_wmi

logger = logging.getLogger(__name__)

MANUFACTURER_COLUMNS = ("prefix", "manufacturer", "country", "region")
REQUIRED_MANUFACTURER_COLUMNS = ("prefix", "manufacturer")
MIN_PREFIX_LENGTH = 2
MAX_PREFIX_LENGTH = SERIAL_START_INDEX


@dataclass(frozen=True)
class ManufacturerRepository:
    """Read-only manufacturer lookup backed by a TSV file.

    Each row registers a 2-11 character VIN prefix. Small-volume makers share
    a 3-character WMI and are told apart by further VDS characters, so lookups
    try the longest registered prefix first.
    """

    path: Path

    @cached_property
    def entries(self) -> dict[str, ManufacturerInfo]:
        """Load and cache the prefix-indexed manufacturer map.

        Returns:
            Dictionary mapping upper-cased prefixes to manufacturer records.

        Raises:
            FileNotFoundError: If the configured file does not exist.
            ReferenceDataError: If a row has a bad prefix or no manufacturer, or
                registers a prefix already bound to a different record.
        """

        mapping: dict[str, ManufacturerInfo] = {}
        for row in read_reference_file(
            self.path, MANUFACTURER_COLUMNS, required=REQUIRED_MANUFACTURER_COLUMNS
        ):
            prefix = row.get("prefix").upper()
            if not MIN_PREFIX_LENGTH <= len(prefix) <= MAX_PREFIX_LENGTH:
                raise ReferenceDataError(
                    self.path,
                    row.line_number,
                    f"prefix {prefix!r} must be {MIN_PREFIX_LENGTH}-{MAX_PREFIX_LENGTH} characters",
                )
            manufacturer = row.get("manufacturer")
            if not manufacturer:
                raise ReferenceDataError(self.path, row.line_number, "empty manufacturer")
            info = ManufacturerInfo(
                prefix=prefix,
                manufacturer=manufacturer,
                country=row.get("country"),
                region=row.get("region") or region_for_wmi(prefix),
            )
            existing = mapping.get(prefix)
            if existing is not None and existing != info:
                raise ReferenceDataError(
                    self.path,
                    row.line_number,
                    f"duplicate prefix {prefix!r} already registered to {existing.manufacturer!r}",
                )
            mapping[prefix] = info

        logger.info("Loaded %d manufacturer prefixes from %s", len(mapping), self.path)
        return mapping

    def find_manufacturer(self, prefix: str) -> ManufacturerInfo:
        """Return the manufacturer registered for the longest matching prefix.

        Args:
            prefix: VIN prefix, usually the 11-character WMI/VDS section.

        Returns:
            Matching manufacturer record.

        Raises:
            ManufacturerNotFoundError: If no registered prefix matches.
        """

        key = prefix.upper()
        for length in range(min(len(key), MAX_PREFIX_LENGTH), MIN_PREFIX_LENGTH - 1, -1):
            info = self.entries.get(key[:length])
            if info is not None:
                return info
        raise ManufacturerNotFoundError(prefix)
