"""Parsing utilities for tab-separated reference data files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from vin_pipeline.errors import ReferenceDataError


@dataclass(frozen=True)
class ReferenceRow:
    """One data row keyed by column name, with its 1-based source line."""

    line_number: int
    cells: dict[str, str]

    def get(self, column: str) -> str:
        """Return the stripped cell for ``column``; empty when absent."""

        return self.cells.get(column, "")


def parse_reference_lines(
    lines: Iterable[str],
    columns: Sequence[str],
    required: Sequence[str] = (),
    source: object = "<lines>",
) -> list[ReferenceRow]:
    """Parse TSV lines into rows keyed by column name.

    Blank lines and ``#`` comments are skipped. The first remaining line is
    treated as a header when its first cell is one of ``columns``, and its
    order is used; otherwise rows are read positionally in ``columns`` order.
    Columns a header leaves out, and cells missing from short rows, read as
    empty.

    Args:
        lines: Raw file lines.
        columns: Expected column names in positional order.
        required: Columns a header must name.
        source: File name used in error messages.

    Returns:
        Parsed rows in file order.

    Raises:
        ReferenceDataError: If a header omits a required column.
    """

    numbered = [
        (number, line.rstrip("\n"))
        for number, line in enumerate(lines, start=1)
        if line.strip() and not line.lstrip().startswith("#")
    ]
    if not numbered:
        return []

    header_number, header_line = numbered[0]
    header_cells = [cell.strip() for cell in header_line.split("\t")]
    indexes: dict[str, int | None]
    if header_cells[0] in columns:
        missing = [column for column in required if column not in header_cells]
        if missing:
            raise ReferenceDataError(
                source, header_number, f"header is missing column(s) {', '.join(missing)}"
            )
        indexes = {
            column: header_cells.index(column) if column in header_cells else None
            for column in columns
        }
        data_lines = numbered[1:]
    else:
        indexes = {column: idx for idx, column in enumerate(columns)}
        data_lines = numbered

    rows: list[ReferenceRow] = []
    for number, line in data_lines:
        cells = [cell.strip() for cell in line.split("\t")]
        rows.append(
            ReferenceRow(
                line_number=number,
                cells={
                    column: cells[idx] if idx is not None and idx < len(cells) else ""
                    for column, idx in indexes.items()
                },
            )
        )
    return rows


def read_reference_file(
    path: Path,
    columns: Sequence[str],
    required: Sequence[str] = (),
) -> list[ReferenceRow]:
    """Read and parse a reference TSV file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ReferenceDataError: If the header omits a required column.
    """

    if not path.exists():
        raise FileNotFoundError(f"Reference data file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        return parse_reference_lines(handle, columns, required=required, source=path)
