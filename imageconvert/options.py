"""Processing options shared by every stage of the pipeline"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .errors import InvalidArgumentError


RGB = Tuple[int, int, int]

_DIGITS_RE = re.compile(r'[0-9]+')
_HEX_COLOR_RE = re.compile(r'[0-9A-Fa-f]{6}')

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 512
DEFAULT_QUALITY = 85
DEFAULT_PAD_COLOR: RGB = (255, 255, 255)


class ResizeMode(str, Enum):
    """How the source image is mapped onto the target box."""

    FIT = 'fit'          # contain, pad the remainder with pad_color
    FILL = 'fill'        # cover, crop the excess from the center
    STRETCH = 'stretch'  # exact box, aspect ratio not kept


@dataclass(frozen=True)
class ProcessOptions:
    """Options for a single conversion run.

    Attributes:
        width: Target width in pixels
        height: Target height in pixels
        mode: Resize policy (fit, fill or stretch)
        quality: Output quality 1-100, used by lossy formats only
        output_format: Output format name; derived from the output path when None
        pad_color: RGB color of the letterbox bands in fit mode
    """
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    mode: ResizeMode = ResizeMode.FIT
    quality: int = DEFAULT_QUALITY
    output_format: Optional[str] = None
    pad_color: RGB = DEFAULT_PAD_COLOR

    def __post_init__(self):
        """Validate and normalize option values."""
        if not isinstance(self.mode, ResizeMode):
            object.__setattr__(self, 'mode', parse_resize_mode(self.mode))

        for name in ('width', 'height'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidArgumentError(f"{name} must be a positive integer, got {value!r}")

        if isinstance(self.quality, bool) or not isinstance(self.quality, int) \
                or not 1 <= self.quality <= 100:
            raise InvalidArgumentError(f"Quality must be 1-100, got {self.quality!r}")

        if self.output_format is not None:
            fmt = self.output_format.strip().removeprefix('.').lower()
            object.__setattr__(self, 'output_format', fmt or None)

        color = tuple(self.pad_color)
        if len(color) != 3 or any(
            isinstance(c, bool) or not isinstance(c, int) or not 0 <= c <= 255 for c in color
        ):
            raise InvalidArgumentError(f"Pad color must be three values 0-255, got {self.pad_color!r}")
        object.__setattr__(self, 'pad_color', color)

    @property
    def size(self) -> Tuple[int, int]:
        """Target box as (width, height)."""
        return (self.width, self.height)


def parse_size(value: str) -> Tuple[int, int]:
    """
    Parse a WIDTHxHEIGHT string.

    Args:
        value: Size string such as "1024x768"

    Returns:
        Tuple of (width, height)

    Raises:
        InvalidArgumentError: If the string is malformed or not positive
    """
    parts = value.strip().lower().split('x')
    if len(parts) != 2:
        raise InvalidArgumentError(f"Invalid size format: {value} (expected WIDTHxHEIGHT)")

    dims = []
    for label, part in zip(('width', 'height'), parts):
        if not _DIGITS_RE.fullmatch(part):
            raise InvalidArgumentError(f"Invalid {label} in size: {part}")
        dim = int(part)
        if dim <= 0:
            raise InvalidArgumentError(f"Invalid {label} in size: {part} (must be > 0)")
        dims.append(dim)

    return (dims[0], dims[1])


def parse_hex_color(value: str) -> RGB:
    """
    Parse a #RRGGBB color. The leading '#' is optional.

    Args:
        value: Hex color string

    Returns:
        Tuple of (r, g, b)

    Raises:
        InvalidArgumentError: If the string is not six hex digits
    """
    digits = value.strip()
    if digits.startswith('#'):
        digits = digits[1:]

    if len(digits) != 6:
        raise InvalidArgumentError(f"Invalid pad color format: {value} (expected #RRGGBB)")

    if not _HEX_COLOR_RE.fullmatch(digits):
        raise InvalidArgumentError(f"Invalid pad color: {value}")

    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def parse_resize_mode(value: Union[str, ResizeMode]) -> ResizeMode:
    """Map 'fit' / 'fill' / 'stretch' (any case) to a ResizeMode."""
    if isinstance(value, ResizeMode):
        return value
    try:
        return ResizeMode(str(value).strip().lower())
    except ValueError:
        raise InvalidArgumentError(f"Invalid resize mode: {value}") from None
