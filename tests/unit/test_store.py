"""Unit tests for the in-memory decoded VIN store."""

from __future__ import annotations

from pathlib import Path

import pytest

from vin_pipeline.config import DecoderConfig
from vin_pipeline.errors import CheckDigitError
from vin_pipeline.pipeline import VinDecoder
from vin_pipeline.reference.descriptors import DescriptorRepository
from vin_pipeline.reference.manufacturers import ManufacturerRepository
from vin_pipeline.store import VinStore, find_or_decode

FIXTURES = Path(__file__).resolve().parents[1] / "fixtures"


@pytest.fixture
def decoder() -> VinDecoder:
    return VinDecoder(
        manufacturers=ManufacturerRepository(FIXTURES / "manufacturers.tsv"),
        descriptors=DescriptorRepository(FIXTURES / "descriptors.tsv"),
        config=DecoderConfig(current_year=2025),
    )


def test_find_or_insert_reuses_existing_full_vin(decoder: VinDecoder) -> None:
    store = VinStore()
    decoded = decoder.decode("1HGCM82633A004352")

    first, created = store.find_or_insert(decoded)
    second, created_again = store.find_or_insert(decoder.decode("1HGCM82633A004352"))

    assert created is True
    assert created_again is False
    assert second == first
    assert second.vin is decoded
    assert len(store) == 1


def test_get_and_find_by_full(decoder: VinDecoder) -> None:
    store = VinStore()
    record, _ = store.find_or_insert(decoder.decode("JTEHD20V650050824"))

    assert store.get(record.key) == record
    assert store.find_by_full("JTEHD20V650050824") == record
    assert store.find_by_full("1HGCM82633A004352") is None
    with pytest.raises(KeyError):
        store.get(record.key + 1)


def test_page_returns_records_in_key_order(decoder: VinDecoder) -> None:
    store = VinStore()
    for vin in ["1HGCM82633A004352", "1M8GDM9AXKP042788", "JTEHD20V650050824"]:
        store.find_or_insert(decoder.decode(vin))

    assert [record.vin.full for record in store.page(1, 2)] == [
        "1HGCM82633A004352",
        "1M8GDM9AXKP042788",
    ]
    assert [record.vin.full for record in store.page(2, 2)] == ["JTEHD20V650050824"]
    assert store.page(3, 2) == ()
    with pytest.raises(ValueError):
        store.page(0, 2)


def test_find_or_decode_checks_store_before_decoding(decoder: VinDecoder) -> None:
    store = VinStore()

    record, created = find_or_decode(store, decoder, "1HGCM82633A004352")
    again, created_again = find_or_decode(store, decoder, "1HGCM82633A004352")

    assert created is True
    assert created_again is False
    assert again == record


def test_find_or_decode_stores_nothing_on_error(decoder: VinDecoder) -> None:
    store = VinStore()

    with pytest.raises(CheckDigitError):
        find_or_decode(store, decoder, "5YJ3E1EA7JF000000")

    assert len(store) == 0
