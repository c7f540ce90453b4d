"""Stage 3: Attach manufacturer and descriptor records from lookup collaborators."""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

from vin_pipeline.errors import DescriptorNotFoundError, ManufacturerNotFoundError
from vin_pipeline.models import DescriptorInfo, ManufacturerInfo

logger = logging.getLogger(__name__)


class ManufacturerLookup(Protocol):
    """Collaborator resolving a 2-11 character VIN prefix to a manufacturer."""

    def find_manufacturer(self, prefix: str) -> ManufacturerInfo:
        """Return the manufacturer or raise ``ManufacturerNotFoundError``."""


class DescriptorLookup(Protocol):
    """Collaborator resolving body/series metadata for a VIN prefix."""

    def find_descriptor(
        self,
        manufacturer: ManufacturerInfo,
        prefix: str,
        candidate_years: Sequence[int],
    ) -> DescriptorInfo:
        """Return the descriptor or raise ``DescriptorNotFoundError``."""


def lookup_manufacturer(prefix: str, manufacturers: ManufacturerLookup) -> ManufacturerInfo:
    """Resolve the manufacturer for a WMI/VDS prefix.

    A collaborator returning ``None`` is treated as a miss so that no empty
    manufacturer record ever reaches a decoded VIN.

    Raises:
        ManufacturerNotFoundError: If the collaborator has no record.
    """

    info = manufacturers.find_manufacturer(prefix)
    if info is None:
        raise ManufacturerNotFoundError(prefix)
    logger.debug("Prefix %s resolved to manufacturer %s", prefix, info.manufacturer)
    return info


def lookup_descriptor(
    manufacturer: ManufacturerInfo,
    prefix: str,
    candidate_years: Sequence[int],
    descriptors: DescriptorLookup,
) -> DescriptorInfo:
    """Resolve the body/series descriptor for a decoded prefix.

    Raises:
        DescriptorNotFoundError: If the collaborator has no record.
    """

    info = descriptors.find_descriptor(manufacturer, prefix, tuple(candidate_years))
    if info is None:
        raise DescriptorNotFoundError(manufacturer.manufacturer, prefix, candidate_years)
    logger.debug("Prefix %s resolved to %s %s", prefix, info.model, info.series.spec)
    return info
