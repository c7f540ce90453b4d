"""Immutable VIN constant tables per ISO 3779 / NHTSA.

All tables are module-level read-only mappings built once at import time and
shared by every decode call.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

VIN_LENGTH = 17

# I, O and Q are reserved to avoid confusion with 1 and 0.
ILLEGAL_CHARS = frozenset("IOQ")
VALID_CHARS = frozenset("0123456789ABCDEFGHJKLMNPRSTUVWXYZ")

CHECK_DIGIT_INDEX = 8
YEAR_CODE_INDEX = 9
PLANT_CODE_INDEX = 10
SERIAL_START_INDEX = 11

CHARACTER_WEIGHTS: Mapping[str, int] = MappingProxyType(
    {
        "A": 1, "B": 2, "C": 3, "D": 4, "E": 5, "F": 6, "G": 7, "H": 8,
        "J": 1, "K": 2, "L": 3, "M": 4, "N": 5, "P": 7, "R": 9,
        "S": 2, "T": 3, "U": 4, "V": 5, "W": 6, "X": 7, "Y": 8, "Z": 9,
    }
)

# Position 8 is the check digit itself and carries weight 0.
POSITION_WEIGHTS: tuple[int, ...] = (8, 7, 6, 5, 4, 3, 2, 10, 0, 9, 8, 7, 6, 5, 4, 3, 2)

# Year codes in cycle order; the index is the offset from the cycle start.
MODEL_YEAR_CODES = "ABCDEFGHJKLMNPRSTVWXY123456789"
MODEL_YEAR_OFFSETS: Mapping[str, int] = MappingProxyType(
    {code: offset for offset, code in enumerate(MODEL_YEAR_CODES)}
)
MODEL_YEAR_CYCLE = len(MODEL_YEAR_CODES)

DEFAULT_CYCLE_ANCHORS: tuple[int, ...] = (1980, 2010)

# ISO 3780 geographic zones keyed by the first WMI character.
WMI_REGIONS: tuple[tuple[str, str], ...] = (
    ("12345", "North America"),
    ("ABCDEFGH", "Africa"),
    ("JKLMNPR", "Asia"),
    ("STUVWXYZ", "Europe"),
    ("67", "Oceania"),
    ("89", "South America"),
)


def region_for_wmi(wmi: str) -> str:
    """Return the ISO 3780 zone for a WMI, or ``"Unknown"``."""

    if not wmi:
        return "Unknown"
    first = wmi[0].upper()
    for chars, region in WMI_REGIONS:
        if first in chars:
            return region
    return "Unknown"
