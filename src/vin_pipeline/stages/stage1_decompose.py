"""Stage 1: Split a validated VIN into its positional sections."""

from __future__ import annotations

import logging

from vin_pipeline.errors import LengthError
from vin_pipeline.models import VinSections
from vin_pipeline.tables import (
    CHECK_DIGIT_INDEX,
    PLANT_CODE_INDEX,
    SERIAL_START_INDEX,
    VIN_LENGTH,
    YEAR_CODE_INDEX,
)

logger = logging.getLogger(__name__)


def parse_serial(serial_text: str) -> int | None:
    """Parse the production serial from VIN positions 11-16.

    VIS serials occasionally carry letters as padding in the wild. Those
    serials decode as absent rather than failing the VIN.

    Args:
        serial_text: The 6-character serial section.

    Returns:
        Non-negative serial integer, or ``None`` when not purely numeric.
    """

    if serial_text and serial_text.isascii() and serial_text.isdigit():
        return int(serial_text)
    logger.debug("Serial %r is not numeric; leaving it absent", serial_text)
    return None


def decompose_vin(vin: str) -> tuple[str, int | None]:
    """Return the 11-character WMI/VDS prefix and the serial of a VIN.

    Args:
        vin: Validated 17-character VIN.

    Returns:
        Tuple of ``(prefix, serial)``; ``serial`` is ``None`` when absent.

    Raises:
        LengthError: If ``vin`` is not 17 characters long.
    """

    if len(vin) != VIN_LENGTH:
        raise LengthError(len(vin), VIN_LENGTH)
    return vin[:SERIAL_START_INDEX], parse_serial(vin[SERIAL_START_INDEX:])


def vin_sections(vin: str) -> VinSections:
    """Return every named section of a validated 17-character VIN."""

    if len(vin) != VIN_LENGTH:
        raise LengthError(len(vin), VIN_LENGTH)
    return VinSections(
        wmi=vin[:3],
        vds=vin[3:YEAR_CODE_INDEX],
        check_digit=vin[CHECK_DIGIT_INDEX],
        year_code=vin[YEAR_CODE_INDEX],
        plant_code=vin[PLANT_CODE_INDEX],
        vis=vin[YEAR_CODE_INDEX:],
        serial_text=vin[SERIAL_START_INDEX:],
    )
