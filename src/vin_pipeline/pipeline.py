"""Top-level orchestration for the staged VIN decode pipeline."""

from __future__ import annotations

import logging
from typing import Iterable

from vin_pipeline.config import DecoderConfig
from vin_pipeline.errors import MappingError, VinDecodeError
from vin_pipeline.models import DecodedVIN, DecodeFailure, PipelineResult
from vin_pipeline.stages.stage1_decompose import decompose_vin
from vin_pipeline.stages.stage2_model_year import resolve_model_years
from vin_pipeline.stages.stage3_enrich import (
    DescriptorLookup,
    ManufacturerLookup,
    lookup_descriptor,
    lookup_manufacturer,
)
from vin_pipeline.tables import YEAR_CODE_INDEX
from vin_pipeline.validation import validate_vin

logger = logging.getLogger(__name__)


class VinDecoder:
    """Decode VINs against a pair of reference lookup collaborators.

    The decoder holds no per-VIN state; one instance can serve concurrent
    callers as long as its collaborators can.
    """

    def __init__(
        self,
        manufacturers: ManufacturerLookup,
        descriptors: DescriptorLookup,
        config: DecoderConfig | None = None,
    ) -> None:
        self.manufacturers = manufacturers
        self.descriptors = descriptors
        self.config = config or DecoderConfig()

    def decode(self, raw: str) -> DecodedVIN:
        """Validate, decompose and enrich one VIN.

        Decoding is all-or-nothing: the first failing stage raises and no
        partial record is returned.

        Args:
            raw: Candidate VIN.

        Returns:
            Fully populated ``DecodedVIN``.

        Raises:
            VinValidationError: From the length/charset/check-digit gate.
            ManufacturerNotFoundError: If the prefix has no manufacturer.
            UnknownYearCharError: If position 9 is not a year code.
            DescriptorNotFoundError: If no body/series descriptor matches.
        """

        validate_vin(raw)
        prefix, serial = decompose_vin(raw)
        manufacturer = lookup_manufacturer(prefix, self.manufacturers)
        years = resolve_model_years(
            raw[YEAR_CODE_INDEX],
            current_year=self.config.resolve_current_year(),
            cycle_anchors=self.config.cycle_anchors,
        )
        descriptor = lookup_descriptor(manufacturer, prefix, years, self.descriptors)

        return DecodedVIN(
            full=raw,
            wmi=prefix,
            serial=serial,
            manufacturer_info=manufacturer,
            candidate_years=years,
            descriptor_info=descriptor,
        )


def decode_vin(
    raw: str,
    manufacturers: ManufacturerLookup,
    descriptors: DescriptorLookup,
    current_year: int | None = None,
) -> DecodedVIN:
    """Decode one VIN with default cycle anchors.

    See :meth:`VinDecoder.decode` for the stages and errors.
    """

    config = DecoderConfig(current_year=current_year)
    return VinDecoder(manufacturers, descriptors, config).decode(raw)


def run_pipeline(vins: Iterable[str], decoder: VinDecoder) -> PipelineResult:
    """Decode a batch of VINs, collecting failures instead of stopping.

    ``MappingError`` signals a defect rather than bad input and propagates.

    Args:
        vins: Candidate VINs in input order.
        decoder: Configured decoder.

    Returns:
        ``PipelineResult`` with decoded VINs and per-VIN failures.
    """

    decoded: list[DecodedVIN] = []
    failures: list[DecodeFailure] = []
    for vin in vins:
        try:
            decoded.append(decoder.decode(vin))
        except MappingError:
            raise
        except VinDecodeError as exc:
            logger.debug("VIN %s failed at %s: %s", vin, exc.stage, exc)
            failures.append(DecodeFailure(vin=vin, stage=exc.stage, kind=exc.kind, message=str(exc)))

    logger.info("Decoded %d VINs, %d failed", len(decoded), len(failures))
    return PipelineResult(decoded=tuple(decoded), failures=tuple(failures))


def validate_batch(vins: Iterable[str]) -> tuple[tuple[str, ...], tuple[DecodeFailure, ...]]:
    """Run only the validation gate over a batch of VINs.

    Returns:
        Tuple of ``(valid_vins, failures)`` in input order.
    """

    valid: list[str] = []
    failures: list[DecodeFailure] = []
    for vin in vins:
        try:
            validate_vin(vin)
        except MappingError:
            raise
        except VinDecodeError as exc:
            failures.append(DecodeFailure(vin=vin, stage=exc.stage, kind=exc.kind, message=str(exc)))
        else:
            valid.append(vin)
    return tuple(valid), tuple(failures)
