"""Format-specific image encoders with optional dependency support.

Provides encoders for every writable format. AVIF needs a Pillow build with
libavif (or pillow-avif-plugin); JPEG output gets an extra lossless pass when
MozJPEG optimization is installed.
"""

from abc import ABC, abstractmethod
from io import BytesIO
from typing import Optional, Dict
import logging

from PIL import Image, features

from .result import EncoderOptions


logger = logging.getLogger(__name__)


# Optional dependency checks
MOZJPEG_AVAILABLE = False
try:
    import mozjpeg_lossless_optimization
    MOZJPEG_AVAILABLE = True
except ImportError:
    pass

AVIF_AVAILABLE = features.check('avif')
if not AVIF_AVAILABLE:
    try:
        import pillow_avif  # noqa: F401
        AVIF_AVAILABLE = True
    except ImportError:
        pass

# ICO directory entries store each dimension in a single byte
ICO_MAX_SIZE = 256

# Fixed encoder speed for AVIF (0=slowest/best, 10=fastest)
AVIF_SPEED = 8


class BaseEncoder(ABC):
    """Abstract base class for format-specific encoders."""

    format_name: str
    supports_quality: bool = False
    file_extension: str

    @abstractmethod
    def encode(
        self,
        image: Image.Image,
        options: EncoderOptions
    ) -> bytes:
        """Encode image to bytes.

        Args:
            image: PIL Image to encode
            options: Encoding options

        Returns:
            Encoded image bytes
        """
        pass

    def prepare_image(self, image: Image.Image) -> Image.Image:
        """Prepare image for encoding (mode conversion, etc).

        Args:
            image: Source image

        Returns:
            Image ready for encoding
        """
        if image.mode == 'P':
            if 'transparency' in image.info:
                return image.convert('RGBA')
            return image.convert('RGB')
        elif image.mode not in ('RGB', 'RGBA'):
            return image.convert('RGBA' if 'A' in image.getbands() else 'RGB')
        return image

    def _save(self, image: Image.Image, **params) -> bytes:
        buffer = BytesIO()
        image.save(buffer, format=self.format_name, **params)
        return buffer.getvalue()


class JpegEncoder(BaseEncoder):
    """JPEG encoder with MozJPEG optimization support."""

    format_name = "JPEG"
    supports_quality = True
    file_extension = ".jpg"

    def encode(self, image: Image.Image, options: EncoderOptions) -> bytes:
        """Encode image as JPEG."""
        image = self.prepare_image(image)
        encoded_bytes = self._save(image, quality=options.quality, optimize=True)

        if MOZJPEG_AVAILABLE:
            try:
                encoded_bytes = mozjpeg_lossless_optimization.optimize(encoded_bytes)
            except Exception as e:
                logger.debug("MozJPEG optimization skipped: %s", e)

        return encoded_bytes

    def prepare_image(self, image: Image.Image) -> Image.Image:
        """Convert to RGB for JPEG."""
        if image.mode == 'P':
            image = image.convert('RGBA')
        if image.mode in ('RGBA', 'LA'):
            # Composite on white background
            background = Image.new('RGB', image.size, (255, 255, 255))
            background.paste(image, mask=image.split()[-1])
            return background
        elif image.mode != 'RGB':
            return image.convert('RGB')
        return image


class PngEncoder(BaseEncoder):
    """PNG encoder (lossless, no quality setting)."""

    format_name = "PNG"
    file_extension = ".png"

    def encode(self, image: Image.Image, options: EncoderOptions) -> bytes:
        """Encode image as PNG."""
        return self._save(self.prepare_image(image), optimize=True)


class GifEncoder(BaseEncoder):
    """GIF encoder; Pillow quantizes to a 256 color palette."""

    format_name = "GIF"
    file_extension = ".gif"

    def encode(self, image: Image.Image, options: EncoderOptions) -> bytes:
        return self._save(self.prepare_image(image))


class BmpEncoder(BaseEncoder):
    """BMP encoder (uncompressed, 24 or 32 bits per pixel)."""

    format_name = "BMP"
    file_extension = ".bmp"

    def encode(self, image: Image.Image, options: EncoderOptions) -> bytes:
        return self._save(self.prepare_image(image))


class TiffEncoder(BaseEncoder):
    """TIFF encoder using deflate compression."""

    format_name = "TIFF"
    file_extension = ".tiff"

    def encode(self, image: Image.Image, options: EncoderOptions) -> bytes:
        """Encode image as deflate-compressed TIFF."""
        return self._save(self.prepare_image(image), compression='tiff_deflate')


class WebpEncoder(BaseEncoder):
    """WebP encoder (lossy)."""

    format_name = "WEBP"
    supports_quality = True
    file_extension = ".webp"

    def encode(self, image: Image.Image, options: EncoderOptions) -> bytes:
        """Encode image as WebP."""
        return self._save(
            self.prepare_image(image),
            quality=options.quality,
            method=min(options.effort, 6),  # WebP method 0-6
        )


class AvifEncoder(BaseEncoder):
    """AVIF encoder using Pillow's libavif support or pillow-avif-plugin."""

    format_name = "AVIF"
    supports_quality = True
    file_extension = ".avif"

    def encode(self, image: Image.Image, options: EncoderOptions) -> bytes:
        """Encode image as AVIF."""
        if not AVIF_AVAILABLE:
            raise RuntimeError(
                "AVIF encoding requires Pillow built with libavif or pillow-avif-plugin"
            )

        return self._save(
            self.prepare_image(image),
            quality=options.quality,
            speed=AVIF_SPEED,
        )


class IcoEncoder(BaseEncoder):
    """ICO encoder writing a single icon at the image's own size."""

    format_name = "ICO"
    file_extension = ".ico"

    def encode(self, image: Image.Image, options: EncoderOptions) -> bytes:
        """Encode image as a single-entry ICO."""
        width, height = image.size
        if width > ICO_MAX_SIZE or height > ICO_MAX_SIZE:
            raise ValueError(
                f"ICO images are limited to {ICO_MAX_SIZE}x{ICO_MAX_SIZE}, got {width}x{height}"
            )
        return self._save(self.prepare_image(image), sizes=[image.size])


class IcnsEncoder(BaseEncoder):
    """Apple icon encoder; Pillow renders the standard square icon sizes."""

    format_name = "ICNS"
    file_extension = ".icns"

    def encode(self, image: Image.Image, options: EncoderOptions) -> bytes:
        return self._save(self.prepare_image(image))


# Encoder registry
_ENCODERS: Dict[str, BaseEncoder] = {
    'JPEG': JpegEncoder(),
    'PNG': PngEncoder(),
    'GIF': GifEncoder(),
    'BMP': BmpEncoder(),
    'TIFF': TiffEncoder(),
    'WEBP': WebpEncoder(),
    'AVIF': AvifEncoder(),
    'ICO': IcoEncoder(),
    'ICNS': IcnsEncoder(),
}


def get_encoder(format_name: str) -> Optional[BaseEncoder]:
    """Get encoder for format.

    Args:
        format_name: Pillow format name (JPEG, PNG, WEBP, ...)

    Returns:
        Encoder instance or None if format has no encoder
    """
    return _ENCODERS.get(format_name.upper())

