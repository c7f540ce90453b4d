"""Validation helpers: the check-digit calculation and the VIN gate."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from vin_pipeline.errors import (
    CheckDigitError,
    IllegalCharacterError,
    LengthError,
    MappingError,
    VinValidationError,
)
from vin_pipeline.models import DecodedVIN, DecodeFailure
from vin_pipeline.tables import (
    CHARACTER_WEIGHTS,
    CHECK_DIGIT_INDEX,
    ILLEGAL_CHARS,
    POSITION_WEIGHTS,
    VALID_CHARS,
    VIN_LENGTH,
)


def character_value(char: str, position: int) -> int:
    """Score one VIN character for the check-digit sum.

    Args:
        char: Single VIN character.
        position: 0-based position, used for error context only.

    Returns:
        The digit value for ``0-9`` or the transliterated letter value.

    Raises:
        MappingError: If the character has no value.
    """

    if char in CHARACTER_WEIGHTS:
        return CHARACTER_WEIGHTS[char]
    if len(char) == 1 and "0" <= char <= "9":
        return ord(char) - ord("0")
    raise MappingError(char, position)


def compute_check_digit(vin: str) -> str:
    """Compute the expected check character for a 17-character VIN.

    Each character value is multiplied by its position weight; the sum modulo
    11 is the check digit, with remainder 10 written as ``X``. Position 8
    carries weight 0, so the current check character never influences the
    result.

    Args:
        vin: 17-character VIN.

    Returns:
        ``"0"``-``"9"`` or ``"X"``.

    Raises:
        LengthError: If ``vin`` is not 17 characters.
        MappingError: If a character cannot be scored.
    """

    if len(vin) != VIN_LENGTH:
        raise LengthError(len(vin), VIN_LENGTH)

    total = 0
    for position, (char, weight) in enumerate(zip(vin, POSITION_WEIGHTS)):
        total += character_value(char, position) * weight

    remainder = total % 11
    return "X" if remainder == 10 else str(remainder)


def validate_vin(candidate: str) -> None:
    """Check length, character set and check digit of a VIN candidate.

    Args:
        candidate: Raw VIN string; no case folding or trimming is applied.

    Raises:
        LengthError: If the candidate is not 17 characters.
        IllegalCharacterError: If it contains I, O, Q or any character
            outside ``0-9A-Z``.
        CheckDigitError: If position 8 does not hold the computed check digit.
    """

    if len(candidate) != VIN_LENGTH:
        raise LengthError(len(candidate), VIN_LENGTH)

    # Reserved letters take precedence so they are reported as such
    # even when another bad character appears earlier.
    for position, char in enumerate(candidate):
        if char in ILLEGAL_CHARS:
            raise IllegalCharacterError(char, position)
    for position, char in enumerate(candidate):
        if char not in VALID_CHARS:
            raise IllegalCharacterError(char, position)

    expected = compute_check_digit(candidate)
    found = candidate[CHECK_DIGIT_INDEX]
    if found != expected:
        raise CheckDigitError(found, expected)


def is_valid_vin(candidate: str) -> bool:
    """Return whether ``candidate`` passes :func:`validate_vin`."""

    try:
        validate_vin(candidate)
    except VinValidationError:
        return False
    return True


def collect_manufacturer_counts(rows: Sequence[DecodedVIN]) -> dict[str, int]:
    """Count decoded VINs by manufacturer name.

    Args:
        rows: Decoded VINs.

    Returns:
        Dictionary of manufacturer to VIN count.
    """

    counter: Counter[str] = Counter()
    for row in rows:
        counter[row.manufacturer_info.manufacturer] += 1
    return dict(counter)


def collect_year_counts(rows: Sequence[DecodedVIN]) -> dict[str, int]:
    """Count decoded VINs by candidate year set, e.g. ``2003`` or ``1989/2019``."""

    counter: Counter[str] = Counter()
    for row in rows:
        label = "/".join(str(year) for year in row.candidate_years) or "none"
        counter[label] += 1
    return dict(counter)


def collect_failure_counts(failures: Sequence[DecodeFailure]) -> dict[str, int]:
    """Count failures by error kind."""

    counter: Counter[str] = Counter()
    for failure in failures:
        counter[failure.kind] += 1
    return dict(counter)
