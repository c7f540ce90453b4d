"""Markdown report generation for decode run summaries."""

from __future__ import annotations

from typing import Iterable, Sequence

from vin_pipeline.models import PipelineResult
from vin_pipeline.validation import (
    collect_failure_counts,
    collect_manufacturer_counts,
    collect_year_counts,
)


def _markdown_cell(value: str) -> str:
    """Escape pipe characters so a value stays inside one table cell."""

    return value.replace("|", "\\|")


def _markdown_table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render a deterministic GitHub-flavored markdown table.

    Args:
        headers: Table header labels.
        rows: Table body rows as string sequences.

    Returns:
        Markdown table text.
    """

    line_header = "| " + " | ".join(headers) + " |"
    line_sep = "| " + " | ".join("---" for _ in headers) + " |"
    body = ["| " + " | ".join(_markdown_cell(cell) for cell in row) + " |" for row in rows]
    return "\n".join([line_header, line_sep, *body])


def _counts_by_frequency(counts: dict[str, int]) -> list[tuple[str, str]]:
    return [
        (label, str(counts[label]))
        for label in sorted(counts, key=lambda item: (-counts[item], item))
    ]


def build_report_md(result: PipelineResult) -> str:
    """Build the markdown report for one decode run.

    Args:
        result: Batch decode result.

    Returns:
        Full markdown content with summary tables.
    """

    decoded_rows = [
        (
            row.full,
            row.manufacturer_info.manufacturer,
            row.descriptor_info.model,
            "/".join(str(year) for year in row.candidate_years) or "none",
            "" if row.serial is None else str(row.serial),
        )
        for row in result.decoded
    ]
    failure_rows = [
        (failure.vin, failure.stage, failure.kind, failure.message)
        for failure in sorted(result.failures, key=lambda item: (item.stage, item.vin))
    ]
    year_counts = collect_year_counts(result.decoded)

    sections = [
        "# VIN Decode Report",
        "",
        f"Decoded {len(result.decoded)} of {result.total} VINs; {len(result.failures)} failed.",
        "",
        "## Decoded VINs per manufacturer",
        _markdown_table(
            ["manufacturer", "vin_count"],
            _counts_by_frequency(collect_manufacturer_counts(result.decoded)),
        ),
        "",
        "## Candidate model years",
        _markdown_table(
            ["candidate_years", "vin_count"],
            [(label, str(year_counts[label])) for label in sorted(year_counts)],
        ),
        "",
        "## Decoded VINs",
        _markdown_table(["vin", "manufacturer", "model", "candidate_years", "serial"], decoded_rows),
        "",
        "## Failures per error kind",
        _markdown_table(
            ["error_kind", "vin_count"],
            _counts_by_frequency(collect_failure_counts(result.failures)),
        ),
        "",
        "## Failed VINs",
        _markdown_table(["vin", "stage", "error_kind", "message"], failure_rows),
    ]

    return "\n".join(sections) + "\n"
