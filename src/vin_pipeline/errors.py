"""Exception taxonomy raised by the VIN decoding stages.

Every error names the stage that failed and carries the offending values so
callers can report the specific problem rather than a generic "invalid VIN".
"""

from __future__ import annotations

from typing import Sequence


class VinDecodeError(Exception):
    """Base class for every failure surfaced by the decode pipeline."""

    stage = "decode"

    @property
    def kind(self) -> str:
        """Return the error class name used in reports."""

        return type(self).__name__


class VinValidationError(VinDecodeError, ValueError):
    """Input failed the length, charset or check-digit gate."""

    stage = "validate"


class LengthError(VinValidationError):
    """Input is not exactly 17 characters long."""

    def __init__(self, length: int, expected: int = 17) -> None:
        self.length = length
        self.expected = expected
        super().__init__(f"VIN must be {expected} characters, got {length}")


class IllegalCharacterError(VinValidationError):
    """Input contains a reserved or non-VIN character."""

    def __init__(self, char: str, position: int) -> None:
        self.char = char
        self.position = position
        super().__init__(f"illegal character {char!r} at position {position}")


class CheckDigitError(VinValidationError):
    """Computed check character does not match position 8 of the input."""

    def __init__(self, found: str, expected: str) -> None:
        self.found = found
        self.expected = expected
        super().__init__(f"check digit {found} is invalid, expected {expected}")


class MappingError(VinDecodeError):
    """A character could not be scored during check-digit computation.

    Validated input never reaches this; seeing it means a caller skipped the
    charset gate, so it is not a ``VinValidationError``.
    """

    stage = "check_digit"

    def __init__(self, char: str, position: int) -> None:
        self.char = char
        self.position = position
        super().__init__(f"no check-digit value for {char!r} at position {position}")


class UnknownYearCharError(VinDecodeError):
    """The model-year character has no entry in the year code table."""

    stage = "model_year"

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"unknown model year code {char!r}")


class LookupNotFoundError(VinDecodeError, LookupError):
    """A reference lookup collaborator had no record for the key."""

    stage = "lookup"


class ManufacturerNotFoundError(LookupNotFoundError):
    """No manufacturer is registered for the VIN prefix."""

    stage = "manufacturer"

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix
        super().__init__(f"no manufacturer registered for prefix {prefix!r}")


class DescriptorNotFoundError(LookupNotFoundError):
    """No body/series descriptor matches the manufacturer, prefix and years."""

    stage = "descriptor"

    def __init__(self, manufacturer: str, prefix: str, candidate_years: Sequence[int]) -> None:
        self.manufacturer = manufacturer
        self.prefix = prefix
        self.candidate_years = tuple(candidate_years)
        years = ", ".join(str(year) for year in self.candidate_years) or "any year"
        super().__init__(
            f"no descriptor for {manufacturer} prefix {prefix!r} in {years}"
        )


class ReferenceDataError(ValueError):
    """A reference data file contains a malformed row."""

    def __init__(self, path: object, line_number: int, message: str) -> None:
        self.path = path
        self.line_number = line_number
        super().__init__(f"{path}:{line_number}: {message}")
