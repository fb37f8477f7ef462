"""Format-specific decode routines.

Each routine takes an open binary file object and returns a PIL Image with
its pixel data loaded. HEIC/HEIF and JPEG XL are provided by optional Pillow
plugins which register themselves on import.
"""

from typing import BinaryIO, Callable, Optional, Sequence

from PIL import Image

from .encoders import AVIF_AVAILABLE


DecodeFunc = Callable[[BinaryIO], Image.Image]


# Optional dependency checks
HEIF_AVAILABLE = False
try:
    from pillow_heif import register_heif_opener
    register_heif_opener()
    HEIF_AVAILABLE = True
except ImportError:
    pass

JXL_AVAILABLE = False
try:
    import pillow_jxl  # noqa: F401
    JXL_AVAILABLE = True
except ImportError:
    pass


def _open(fp: BinaryIO, formats: Optional[Sequence[str]] = None) -> Image.Image:
    image = Image.open(fp, formats=formats)
    # Pull pixel data now, the caller closes fp right after
    image.load()
    return image


def decode_standard(fp: BinaryIO) -> Image.Image:
    """Decode JPEG, PNG, GIF, BMP or TIFF, detected from the file contents."""
    return _open(fp)


def decode_webp(fp: BinaryIO) -> Image.Image:
    return _open(fp, ['WEBP'])


def decode_avif(fp: BinaryIO) -> Image.Image:
    if not AVIF_AVAILABLE:
        raise RuntimeError(
            "AVIF decoding requires Pillow built with libavif or pillow-avif-plugin"
        )
    return _open(fp, ['AVIF'])


def decode_ico(fp: BinaryIO) -> Image.Image:
    """Decode the largest icon in an ICO file."""
    return _open(fp, ['ICO'])


def decode_icns(fp: BinaryIO) -> Image.Image:
    """Decode the largest icon in an ICNS file."""
    return _open(fp, ['ICNS'])


def decode_heif(fp: BinaryIO) -> Image.Image:
    if not HEIF_AVAILABLE:
        raise RuntimeError("HEIC/HEIF decoding is disabled (requires pillow-heif)")
    return _open(fp, ['HEIF'])


def decode_jxl(fp: BinaryIO) -> Image.Image:
    if not JXL_AVAILABLE:
        raise RuntimeError("JPEG XL decoding is disabled (requires pillow-jxl-plugin)")
    return _open(fp, ['JXL'])
