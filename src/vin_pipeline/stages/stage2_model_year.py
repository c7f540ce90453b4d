"""Stage 2: Resolve a model-year code into candidate calendar years."""

from __future__ import annotations

from typing import Sequence

from vin_pipeline.errors import UnknownYearCharError
from vin_pipeline.tables import DEFAULT_CYCLE_ANCHORS, MODEL_YEAR_OFFSETS


def year_offset(year_char: str) -> int:
    """Return the 0-29 cycle offset of a model-year code.

    Raises:
        UnknownYearCharError: If ``year_char`` is not a year code.
    """

    try:
        return MODEL_YEAR_OFFSETS[year_char]
    except KeyError:
        raise UnknownYearCharError(year_char) from None


def resolve_model_years(
    year_char: str,
    current_year: int,
    cycle_anchors: Sequence[int] = DEFAULT_CYCLE_ANCHORS,
) -> tuple[int, ...]:
    """Return the plausible model years for a year code.

    Year codes repeat every 30 years, so each cycle anchor yields one
    candidate. Candidates not strictly before ``current_year`` belong to a
    cycle that has not been issued yet and are dropped.

    Args:
        year_char: Character at VIN position 9.
        current_year: Year the decode is performed in.
        cycle_anchors: Ascending cycle start years.

    Returns:
        Candidate years ordered by anchor; may be empty.

    Raises:
        UnknownYearCharError: If ``year_char`` is not a year code.
    """

    offset = year_offset(year_char)
    return tuple(
        anchor + offset for anchor in cycle_anchors if anchor + offset < current_year
    )
