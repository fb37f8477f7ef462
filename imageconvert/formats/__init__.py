"""Format registry with decode/encode dispatch over Pillow and its plugins."""

from .result import EncodeResult, EncoderOptions
from .registry import (
    FormatCapability,
    capability_for,
    iter_capabilities,
    supported_extensions,
    format_availability,
)
from .encoders import (
    AVIF_AVAILABLE,
    MOZJPEG_AVAILABLE,
    get_encoder,
)
from .decoders import HEIF_AVAILABLE, JXL_AVAILABLE
from .dispatch import decode, encode, resolve_output_format

__all__ = [
    'EncodeResult',
    'EncoderOptions',
    'FormatCapability',
    'capability_for',
    'iter_capabilities',
    'supported_extensions',
    'format_availability',
    'AVIF_AVAILABLE',
    'MOZJPEG_AVAILABLE',
    'HEIF_AVAILABLE',
    'JXL_AVAILABLE',
    'get_encoder',
    'decode',
    'encode',
    'resolve_output_format',
]
