"""Unit tests for Stage 2 model-year resolution."""

from __future__ import annotations

import pytest

from vin_pipeline.config import DecoderConfig
from vin_pipeline.errors import UnknownYearCharError
from vin_pipeline.stages.stage2_model_year import resolve_model_years, year_offset
from vin_pipeline.tables import MODEL_YEAR_CODES, MODEL_YEAR_CYCLE


def test_year_table_covers_thirty_codes() -> None:
    assert MODEL_YEAR_CYCLE == 30
    assert len(set(MODEL_YEAR_CODES)) == 30
    assert not set(MODEL_YEAR_CODES) & set("IOQUZ0")


def test_offset_zero_returns_both_elapsed_cycles() -> None:
    assert year_offset("A") == 0
    assert resolve_model_years("A", current_year=2025) == (1980, 2010)


def test_offset_twenty_excludes_future_cycle() -> None:
    assert year_offset("Y") == 20
    assert resolve_model_years("Y", current_year=2005) == (2000,)


@pytest.mark.parametrize(
    ("code", "current_year", "expected"),
    [
        ("1", 2025, (2001,)),
        ("9", 2025, (2009,)),
        ("K", 2025, (1989, 2019)),
        ("S", 2025, (1995,)),
        ("S", 2026, (1995, 2025)),
    ],
)
def test_candidates_are_strictly_before_current_year(
    code: str, current_year: int, expected: tuple[int, ...]
) -> None:
    assert resolve_model_years(code, current_year=current_year) == expected


def test_no_elapsed_cycle_gives_empty_result() -> None:
    assert resolve_model_years("Y", current_year=1990) == ()


def test_extra_anchor_adds_third_cycle() -> None:
    assert resolve_model_years("A", current_year=2045, cycle_anchors=(1980, 2010, 2040)) == (
        1980,
        2010,
        2040,
    )


@pytest.mark.parametrize("code", ["0", "U", "Z", "I", "a", ""])
def test_unknown_year_code_raises(code: str) -> None:
    with pytest.raises(UnknownYearCharError) as excinfo:
        resolve_model_years(code, current_year=2025)

    assert excinfo.value.char == code


def test_decoder_config_rejects_unsorted_anchors() -> None:
    with pytest.raises(ValueError):
        DecoderConfig(cycle_anchors=(2010, 1980))
    with pytest.raises(ValueError):
        DecoderConfig(cycle_anchors=())


def test_decoder_config_prefers_configured_year() -> None:
    assert DecoderConfig(current_year=2005).resolve_current_year() == 2005
