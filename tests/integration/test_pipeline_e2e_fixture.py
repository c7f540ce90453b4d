"""Integration test chaining input, decode, TSV output and report on fixture data."""

from __future__ import annotations

from pathlib import Path

from vin_pipeline.config import DecoderConfig
from vin_pipeline.io.tsv_io import read_vins, write_tsv
from vin_pipeline.pipeline import VinDecoder, run_pipeline
from vin_pipeline.reference.descriptors import DescriptorRepository
from vin_pipeline.reference.manufacturers import ManufacturerRepository
from vin_pipeline.reporting.report_md import build_report_md
from vin_pipeline.validation import collect_failure_counts

FIXTURES = Path(__file__).resolve().parents[1] / "fixtures"


def test_fixture_batch_decodes_and_reports_every_stage(tmp_path: Path) -> None:
    """Each fixture VIN either decodes or fails at its own stage."""

    decoder = VinDecoder(
        manufacturers=ManufacturerRepository(FIXTURES / "manufacturers.tsv"),
        descriptors=DescriptorRepository(FIXTURES / "descriptors.tsv"),
        config=DecoderConfig(current_year=2025),
    )

    result = run_pipeline(read_vins(FIXTURES / "vins.txt"), decoder)

    assert [(row.wmi, row.serial, row.candidate_years) for row in result.decoded] == [
        ("1HGCM82633A", 4352, (2003,)),
        ("1M8GDM9AXKP", 42788, (1989, 2019)),
        ("JTEHD20V650", 50824, (2005,)),
    ]
    assert [row.descriptor_info.model for row in result.decoded] == [
        "Accord",
        "D-Series",
        "Land Cruiser",
    ]
    assert collect_failure_counts(result.failures) == {
        "CheckDigitError": 1,
        "ManufacturerNotFoundError": 1,
        "DescriptorNotFoundError": 1,
        "UnknownYearCharError": 1,
        "LengthError": 1,
    }
    assert {item.vin: item.stage for item in result.failures} == {
        "5YJ3E1EA7JF000000": "validate",
        "9BWZZZ327VT004251": "manufacturer",
        "WBAAA1305H8251545": "descriptor",
        "1HGCM82690A004352": "model_year",
        "1HGCM826": "validate",
    }

    output = tmp_path / "decoded.tsv"
    write_tsv(result.decoded, output_path=output)
    assert len(output.read_text(encoding="utf-8").splitlines()) == 4

    report = build_report_md(result)
    assert "Decoded 3 of 8 VINs; 5 failed." in report
