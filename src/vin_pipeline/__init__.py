"""VIN validation and decoding pipeline package."""

from .models import DecodedVIN, DescriptorInfo, ManufacturerInfo, PipelineResult
from .pipeline import VinDecoder, decode_vin

__all__ = [
    "DecodedVIN",
    "ManufacturerInfo",
    "DescriptorInfo",
    "PipelineResult",
    "VinDecoder",
    "decode_vin",
]
