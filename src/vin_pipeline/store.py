"""In-memory record store for decoded VINs.

Persistence sits outside the decode core: the decoder never reads or writes
records. Callers wanting find-or-create semantics check the store first with
:func:`find_or_decode`.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from vin_pipeline.models import DecodedVIN
from vin_pipeline.pipeline import VinDecoder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredRecord:
    """Decoded VIN with the key it was stored under."""

    key: int
    vin: DecodedVIN


class VinStore:
    """Thread-safe store keyed by insertion sequence and unique by full VIN."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[int, StoredRecord] = {}
        self._keys_by_full: dict[str, int] = {}
        self._next_key = 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def find_or_insert(self, decoded: DecodedVIN) -> tuple[StoredRecord, bool]:
        """Store ``decoded`` unless a record with the same full VIN exists.

        Returns:
            Tuple of ``(record, created)``; ``created`` is ``False`` when an
            existing record was returned.
        """

        with self._lock:
            existing = self._keys_by_full.get(decoded.full)
            if existing is not None:
                return self._records[existing], False

            record = StoredRecord(key=self._next_key, vin=decoded)
            self._records[record.key] = record
            self._keys_by_full[decoded.full] = record.key
            self._next_key += 1

        logger.debug("Stored VIN %s under key %d", decoded.full, record.key)
        return record, True

    def get(self, key: int) -> StoredRecord:
        """Return the record stored under ``key``.

        Raises:
            KeyError: If no record has that key.
        """

        with self._lock:
            try:
                return self._records[key]
            except KeyError:
                raise KeyError(f"no VIN record with key {key}") from None

    def find_by_full(self, full: str) -> StoredRecord | None:
        """Return the record for a full VIN, or ``None``."""

        with self._lock:
            key = self._keys_by_full.get(full)
            return self._records[key] if key is not None else None

    def page(self, page: int, size: int) -> tuple[StoredRecord, ...]:
        """Return one 1-based page of records in key order.

        Raises:
            ValueError: If ``page`` or ``size`` is below 1.
        """

        if page < 1 or size < 1:
            raise ValueError(f"page and size must be positive, got page={page} size={size}")
        start = (page - 1) * size
        with self._lock:
            keys = sorted(self._records)[start : start + size]
            return tuple(self._records[key] for key in keys)


def find_or_decode(store: VinStore, decoder: VinDecoder, raw: str) -> tuple[StoredRecord, bool]:
    """Return the stored record for ``raw``, decoding and inserting on a miss.

    Decode errors propagate and nothing is stored.

    Returns:
        Tuple of ``(record, created)``.
    """

    existing = store.find_by_full(raw)
    if existing is not None:
        return existing, False
    return store.find_or_insert(decoder.decode(raw))
