"""Encoder options and encode result dataclasses."""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class EncoderOptions:
    """Options for format-specific encoding.

    Attributes:
        quality: Compression quality (1-100), used by lossy formats only
        effort: Encoder effort level (0-10, higher = slower/better)
    """
    quality: int = 85
    effort: int = 4

    def __post_init__(self):
        """Validate options."""
        if not 1 <= self.quality <= 100:
            raise ValueError(f"quality must be 1-100, got {self.quality}")
        if not 0 <= self.effort <= 10:
            raise ValueError(f"effort must be 0-10, got {self.effort}")


@dataclass
class EncodeResult:
    """Encoded image data ready to be written.

    Attributes:
        encoded_bytes: The complete encoded file contents
        format_used: Format name (JPEG, PNG, WEBP, ...)
        dimensions: Image dimensions (width, height)
        quality_used: Quality passed to the encoder, None for lossless formats
    """
    encoded_bytes: bytes
    format_used: str
    dimensions: Tuple[int, int]
    quality_used: Optional[int] = None

    @property
    def size_bytes(self) -> int:
        """Size of the encoded data in bytes."""
        return len(self.encoded_bytes)
