"""CLI entrypoint for the VIN decode pipeline."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from vin_pipeline.config import (
    DEFAULT_DESCRIPTORS_PATH,
    DEFAULT_MANUFACTURERS_PATH,
    DecoderConfig,
)
from vin_pipeline.io.tsv_io import normalize_vin, read_vins, write_tsv
from vin_pipeline.models import DecodeFailure, PipelineResult
from vin_pipeline.pipeline import VinDecoder, run_pipeline, validate_batch
from vin_pipeline.reference.descriptors import DescriptorRepository
from vin_pipeline.reference.manufacturers import ManufacturerRepository
from vin_pipeline.reporting.report_md import build_report_md
from vin_pipeline.validation import collect_failure_counts


def _format_table(headers: Sequence[str], data_rows: Sequence[Sequence[str]]) -> str:
    """Format rows as an ASCII table for terminal output.

    Args:
        headers: Table headers.
        data_rows: Row values.

    Returns:
        Monospace table string.
    """

    widths = [len(header) for header in headers]
    for row in data_rows:
        for idx, value in enumerate(row):
            widths[idx] = max(widths[idx], len(value))

    header_line = " | ".join(header.ljust(widths[idx]) for idx, header in enumerate(headers))
    separator_line = "-+-".join("-" * width for width in widths)
    body_lines = [
        " | ".join(value.ljust(widths[idx]) for idx, value in enumerate(row)) for row in data_rows
    ]
    return "\n".join([header_line, separator_line, *body_lines])


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct CLI argument parser.

    Returns:
        Configured parser for the decode command.
    """

    parser = argparse.ArgumentParser(description="Validate and decode Vehicle Identification Numbers.")
    parser.add_argument("vins", nargs="*", help="VINs to decode.")
    parser.add_argument(
        "--input", type=Path, default=None, help="File with one VIN per line ('#' comments allowed)."
    )
    parser.add_argument(
        "--manufacturers",
        type=Path,
        default=DEFAULT_MANUFACTURERS_PATH,
        help="Path to manufacturer (WMI) reference TSV.",
    )
    parser.add_argument(
        "--descriptors",
        type=Path,
        default=DEFAULT_DESCRIPTORS_PATH,
        help="Path to vehicle descriptor (VDS) reference TSV.",
    )
    parser.add_argument("--output", type=Path, default=None, help="Decoded VIN TSV output path.")
    parser.add_argument("--report", type=Path, default=None, help="Markdown report output path.")
    parser.add_argument(
        "--current-year",
        type=int,
        default=None,
        help="Year the decode is performed in (default: this calendar year).",
    )
    parser.add_argument(
        "--cycle-anchor",
        type=int,
        action="append",
        default=None,
        help="Model-year cycle start year; repeat for each cycle (default: 1980 and 2010).",
    )
    parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Only run the length, character and check-digit checks.",
    )
    parser.add_argument("--no-header", action="store_true", help="Do not write TSV header.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def _collect_vins(args: argparse.Namespace) -> list[str]:
    vins = [normalize_vin(vin) for vin in args.vins]
    if args.input is not None:
        if not args.input.exists():
            raise SystemExit(f"VIN input file not found: {args.input}")
        vins.extend(read_vins(args.input))
    if not vins:
        raise SystemExit("No VINs given; pass VINs as arguments or use --input.")
    return vins


def _print_failures(failures: Sequence[DecodeFailure]) -> None:
    if not failures:
        return
    print("\nFailed VINs:")
    print(
        _format_table(
            ["vin", "stage", "error_kind", "message"],
            [[item.vin, item.stage, item.kind, item.message] for item in failures],
        )
    )
    counts = collect_failure_counts(failures)
    print(
        "\nFailure summary: "
        + ", ".join(f"{kind}={counts[kind]}" for kind in sorted(counts))
    )


def _print_decoded(result: PipelineResult) -> None:
    if not result.decoded:
        print("No VINs decoded.")
        return
    print(
        _format_table(
            ["vin", "manufacturer", "model", "body", "years", "serial"],
            [
                [
                    row.full,
                    row.manufacturer_info.manufacturer,
                    row.descriptor_info.model,
                    row.descriptor_info.body.layout.value,
                    "/".join(str(year) for year in row.candidate_years) or "-",
                    "-" if row.serial is None else str(row.serial),
                ]
                for row in result.decoded
            ],
        )
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run CLI workflow from arguments through artifact generation.

    Returns:
        Zero exit status when every VIN passes, one otherwise.
    """

    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    vins = _collect_vins(args)

    if args.validate_only:
        valid, failures = validate_batch(vins)
        print(f"{len(valid)} of {len(vins)} VINs passed validation.")
        _print_failures(failures)
        return 0 if not failures else 1

    try:
        config = DecoderConfig(
            current_year=args.current_year,
            cycle_anchors=tuple(args.cycle_anchor) if args.cycle_anchor else DecoderConfig().cycle_anchors,
        )
    except ValueError as exc:
        parser.error(str(exc))

    for path in (args.manufacturers, args.descriptors):
        if not path.exists():
            raise SystemExit(f"Reference data file not found: {path}")

    decoder = VinDecoder(
        manufacturers=ManufacturerRepository(args.manufacturers),
        descriptors=DescriptorRepository(args.descriptors),
        config=config,
    )
    result = run_pipeline(vins, decoder)

    _print_decoded(result)
    if args.output is not None:
        write_tsv(result.decoded, output_path=args.output, include_header=not args.no_header)
        print(f"\nWrote {len(result.decoded)} rows to {args.output}")
    if args.report is not None:
        args.report.write_text(build_report_md(result), encoding="utf-8")
        print(f"Wrote report to {args.report}")
    _print_failures(result.failures)

    return 0 if not result.failures else 1


if __name__ == "__main__":
    raise SystemExit(main())
