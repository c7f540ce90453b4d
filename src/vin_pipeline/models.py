"""Data models used across VIN decoding stages.

This module defines explicit immutable records passed between the decode
stages and the reference lookup collaborators so each stage has a narrow,
testable interface and downstream code can rely on stable fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from vin_pipeline.tables import (
    CHECK_DIGIT_INDEX,
    PLANT_CODE_INDEX,
    SERIAL_START_INDEX,
    YEAR_CODE_INDEX,
)


class BodyLayout(str, Enum):
    """Body layouts a vehicle descriptor can declare."""

    SEDAN = "sedan"
    COUPE = "coupe"
    HATCHBACK = "hatchback"
    VAN = "van"
    PICKUP_TRUCK = "pickup_truck"
    STATION_WAGON = "station_wagon"
    CONVERTIBLE = "convertible"
    SUV = "suv"
    FASTBACK = "fastback"


@dataclass(frozen=True)
class ManufacturerInfo:
    """Manufacturer record returned by the WMI lookup collaborator.

    ``prefix`` is the registered key that matched the VIN, between 2 and 11
    characters long.
    """

    prefix: str
    manufacturer: str
    country: str
    region: str


@dataclass(frozen=True)
class Body:
    """Body style with the model years it was produced in."""

    code: str
    layout: BodyLayout
    doors: int
    start_year: int
    end_year: int


@dataclass(frozen=True)
class Series:
    """Trim/series designation with the model years it was offered in."""

    spec: str
    start_year: int
    end_year: int


@dataclass(frozen=True)
class DescriptorInfo:
    """Vehicle descriptor record returned by the VDS lookup collaborator.

    ``vds_pattern`` is matched against VIN positions 3-7; ``*`` matches any
    character.
    """

    manufacturer: str
    vds_pattern: str
    model: str
    body: Body
    series: Series

    def covers_year(self, year: int) -> bool:
        """Return whether ``year`` falls inside the body production range."""

        return self.body.start_year <= year <= self.body.end_year


@dataclass(frozen=True)
class VinSections:
    """Named positional sections of a 17-character VIN."""

    wmi: str
    vds: str
    check_digit: str
    year_code: str
    plant_code: str
    vis: str
    serial_text: str


@dataclass(frozen=True)
class DecodedVIN:
    """Fully decoded VIN with manufacturer and descriptor enrichment.

    ``wmi`` holds the 11-character WMI + VDS prefix used as the lookup key.
    ``serial`` is ``None`` when positions 11-16 are not purely numeric.
    ``candidate_years`` may be empty when no cycle of the year code has
    elapsed yet.
    """

    full: str
    wmi: str
    serial: int | None
    manufacturer_info: ManufacturerInfo
    candidate_years: tuple[int, ...]
    descriptor_info: DescriptorInfo

    @property
    def world_manufacturer_identifier(self) -> str:
        return self.full[:3]

    @property
    def vehicle_descriptor(self) -> str:
        return self.full[3:YEAR_CODE_INDEX]

    @property
    def check_digit(self) -> str:
        return self.full[CHECK_DIGIT_INDEX]

    @property
    def year_code(self) -> str:
        return self.full[YEAR_CODE_INDEX]

    @property
    def plant_code(self) -> str:
        return self.full[PLANT_CODE_INDEX]

    @property
    def vehicle_identifier(self) -> str:
        return self.full[YEAR_CODE_INDEX:]

    @property
    def serial_text(self) -> str:
        return self.full[SERIAL_START_INDEX:]


@dataclass(frozen=True)
class DecodeFailure:
    """Report item for one VIN that failed a decode stage."""

    vin: str
    stage: str
    kind: str
    message: str


@dataclass(frozen=True)
class PipelineResult:
    """Result bundle returned by a batch decode run.

    Attributes:
        decoded: Successfully decoded VINs in input order.
        failures: Per-VIN failures in input order.
    """

    decoded: tuple[DecodedVIN, ...] = field(default_factory=tuple)
    failures: tuple[DecodeFailure, ...] = field(default_factory=tuple)

    @property
    def total(self) -> int:
        return len(self.decoded) + len(self.failures)
