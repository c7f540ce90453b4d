"""Decoder configuration and default reference data locations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path

from vin_pipeline.tables import DEFAULT_CYCLE_ANCHORS

DEFAULT_DATA_DIR = Path("data")
DEFAULT_MANUFACTURERS_PATH = DEFAULT_DATA_DIR / "manufacturers.tsv"
DEFAULT_DESCRIPTORS_PATH = DEFAULT_DATA_DIR / "descriptors.tsv"


@dataclass(frozen=True)
class DecoderConfig:
    """Settings shared by every decode call of one :class:`VinDecoder`.

    Attributes:
        current_year: Year the decode is performed in. ``None`` reads the
            calendar year at each decode.
        cycle_anchors: Start years of the 30-year model-year code cycles.
            Extend this tuple when a new cycle starts to be issued.
    """

    current_year: int | None = None
    cycle_anchors: tuple[int, ...] = DEFAULT_CYCLE_ANCHORS

    def __post_init__(self) -> None:
        if not self.cycle_anchors:
            raise ValueError("cycle_anchors must not be empty")
        if list(self.cycle_anchors) != sorted(set(self.cycle_anchors)):
            raise ValueError(
                f"cycle_anchors must be strictly ascending, got {self.cycle_anchors}"
            )

    def resolve_current_year(self) -> int:
        """Return the configured year, falling back to today's year."""

        if self.current_year is not None:
            return self.current_year
        return date.today().year
