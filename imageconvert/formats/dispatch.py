"""Decode and encode dispatch over the format registry."""

import logging
from pathlib import Path
from typing import Optional, Union

from PIL import Image

from ..errors import (
    DecodeError,
    EncodeError,
    EncodeUnsupportedError,
    ImageIOError,
    UnsupportedFormatError,
)
from .registry import capability_for, normalize_extension
from .result import EncodeResult, EncoderOptions


logger = logging.getLogger(__name__)

# Used when the output path has no extension and no format was given
DEFAULT_OUTPUT_FORMAT = 'jpg'

# Single-channel modes wider than 8 bits; Pillow clamps these in convert()
WIDE_GRAYSCALE_MODES = ('I', 'F')


def to_rgba(image: Image.Image) -> Image.Image:
    """
    Convert a decoded image to RGBA.

    16-bit and 32-bit integer or float grayscale data is treated as a
    0-65535 range and scaled down to 8 bits first.

    Args:
        image: Decoded PIL Image in any mode

    Returns:
        RGBA PIL Image
    """
    if image.mode.startswith('I;16'):
        image = image.convert('I')
    if image.mode in WIDE_GRAYSCALE_MODES:
        image = image.convert('F').point(lambda v: v / 256).convert('L')
    return image.convert('RGBA')


def decode(path: Union[str, Path]) -> Image.Image:
    """
    Decode an image file into an RGBA raster.

    Args:
        path: Input file path; its extension selects the decoder

    Returns:
        Loaded RGBA PIL Image, not tied to any open file

    Raises:
        UnsupportedFormatError: If the extension is unknown or cannot be decoded
        ImageIOError: If the file cannot be opened
        DecodeError: If the decoder fails on the file contents
    """
    path = Path(path)
    extension = normalize_extension(path.suffix)
    capability = capability_for(extension)

    if capability is None:
        raise UnsupportedFormatError(extension or path.name)
    if not capability.can_decode:
        raise UnsupportedFormatError(extension, capability.decode_reason or None)

    try:
        fp = open(path, 'rb')
    except OSError as e:
        raise ImageIOError(path, e, action='open') from e

    logger.debug("Decoding %s as %s", path, capability.format_name)
    with fp:
        try:
            # convert() copies the pixels, detaching them from fp
            image = to_rgba(capability.decoder(fp))
        except Exception as e:
            raise DecodeError(extension, e) from e

    logger.debug("Decoded %s: %dx%d", path, image.width, image.height)
    return image


def resolve_output_format(
    output_path: Union[str, Path],
    explicit: Optional[str] = None
) -> str:
    """
    Decide the output format name.

    Args:
        output_path: Output file path
        explicit: Format requested by the caller, wins when given

    Returns:
        Lower-case format name / extension, "jpg" if nothing else applies
    """
    if explicit:
        fmt = normalize_extension(explicit)
        if fmt:
            return fmt

    fmt = normalize_extension(Path(output_path).suffix)
    return fmt or DEFAULT_OUTPUT_FORMAT


def encode(image: Image.Image, format_name: str, quality: int) -> EncodeResult:
    """
    Encode an image in memory.

    Args:
        image: Image to encode
        format_name: Extension-style format name (jpg, png, webp, ...)
        quality: Quality 1-100, ignored by lossless formats

    Returns:
        EncodeResult holding the complete file contents

    Raises:
        UnsupportedFormatError: If the format is unknown
        EncodeUnsupportedError: If the format can only be decoded
        EncodeError: If the encoder fails
    """
    fmt = normalize_extension(format_name)
    capability = capability_for(fmt)

    if capability is None:
        raise UnsupportedFormatError(fmt, f"Unsupported output format: {format_name}")
    if not capability.can_encode:
        raise EncodeUnsupportedError(fmt, capability.encode_reason)

    encoder = capability.encoder
    logger.debug(
        "Encoding %dx%d image as %s (quality=%s)",
        image.width, image.height, encoder.format_name,
        quality if encoder.supports_quality else "n/a",
    )
    try:
        encoded_bytes = encoder.encode(image, EncoderOptions(quality=quality))
    except Exception as e:
        raise EncodeError(fmt, e) from e

    return EncodeResult(
        encoded_bytes=encoded_bytes,
        format_used=encoder.format_name,
        dimensions=image.size,
        quality_used=quality if encoder.supports_quality else None,
    )
