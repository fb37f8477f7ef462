"""Static table of supported file extensions and their codecs.

Each extension maps to an optional decode routine and an optional encoder.
A missing side is a deliberate gap, and carries the reason shown to the user.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from . import decoders
from .decoders import DecodeFunc
from .encoders import BaseEncoder, get_encoder, AVIF_AVAILABLE, MOZJPEG_AVAILABLE


@dataclass(frozen=True)
class FormatCapability:
    """What this tool can do with one file extension.

    Attributes:
        extension: Lower-case extension without the dot
        format_name: Canonical format name (JPEG, HEIF, JP2, ...)
        decoder: Decode routine, None if the format cannot be read
        encoder: Encoder, None if the format cannot be written
        decode_reason: Why decoding is unavailable
        encode_reason: Why encoding is unavailable
    """
    extension: str
    format_name: str
    decoder: Optional[DecodeFunc] = None
    encoder: Optional[BaseEncoder] = None
    decode_reason: str = ""
    encode_reason: str = ""

    @property
    def can_decode(self) -> bool:
        return self.decoder is not None

    @property
    def can_encode(self) -> bool:
        return self.encoder is not None


HEIF_ENCODE_REASON = (
    "pillow-heif is only registered as an image opener here, "
    "so HEIC/HEIF can be read but not written"
)
JXL_ENCODE_REASON = (
    "the JPEG XL plugin is only used for reading, "
    "so JXL can be read but not written"
)
JP2_DECODE_REASON = "JPEG 2000 (.jp2) format is not supported for decoding"
JP2_ENCODE_REASON = "no JPEG 2000 codec is available for encoding"


def _both(extension: str, format_name: str, decoder: DecodeFunc) -> FormatCapability:
    return FormatCapability(extension, format_name, decoder, get_encoder(format_name))


_CAPABILITIES: List[FormatCapability] = [
    _both('jpg', 'JPEG', decoders.decode_standard),
    _both('jpeg', 'JPEG', decoders.decode_standard),
    _both('png', 'PNG', decoders.decode_standard),
    _both('gif', 'GIF', decoders.decode_standard),
    _both('bmp', 'BMP', decoders.decode_standard),
    _both('tif', 'TIFF', decoders.decode_standard),
    _both('tiff', 'TIFF', decoders.decode_standard),
    _both('webp', 'WEBP', decoders.decode_webp),
    _both('avif', 'AVIF', decoders.decode_avif),
    _both('ico', 'ICO', decoders.decode_ico),
    _both('icns', 'ICNS', decoders.decode_icns),
    FormatCapability('heic', 'HEIF', decoders.decode_heif, encode_reason=HEIF_ENCODE_REASON),
    FormatCapability('heif', 'HEIF', decoders.decode_heif, encode_reason=HEIF_ENCODE_REASON),
    FormatCapability('jxl', 'JXL', decoders.decode_jxl, encode_reason=JXL_ENCODE_REASON),
    FormatCapability(
        'jp2', 'JP2',
        decode_reason=JP2_DECODE_REASON,
        encode_reason=JP2_ENCODE_REASON,
    ),
]

_BY_EXTENSION: Dict[str, FormatCapability] = {}
for _capability in _CAPABILITIES:
    if _capability.extension in _BY_EXTENSION:
        raise RuntimeError(f"Duplicate format extension: {_capability.extension}")
    _BY_EXTENSION[_capability.extension] = _capability


def normalize_extension(extension: str) -> str:
    """Lower-case an extension and strip surrounding whitespace and one leading dot."""
    return extension.strip().removeprefix('.').lower()


def capability_for(extension: str) -> Optional[FormatCapability]:
    """
    Look up the capability for a file extension.

    Args:
        extension: Extension such as ".PNG", "jpg" or "tiff"

    Returns:
        FormatCapability or None if the extension is unknown
    """
    return _BY_EXTENSION.get(normalize_extension(extension))


def iter_capabilities() -> Iterator[FormatCapability]:
    """Iterate over all registered formats in table order."""
    return iter(_CAPABILITIES)


def supported_extensions() -> List[str]:
    """All registered extensions, readable or writable or neither."""
    return [c.extension for c in _CAPABILITIES]


def format_availability() -> Dict[str, bool]:
    """Which optional codec plugins are installed.

    Returns:
        Dict with a boolean flag per optional plugin
    """
    return {
        'avif': AVIF_AVAILABLE,
        'heif': decoders.HEIF_AVAILABLE,
        'jxl': decoders.JXL_AVAILABLE,
        'mozjpeg': MOZJPEG_AVAILABLE,
    }
