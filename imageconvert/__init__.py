"""Image conversion package: decode, resize/pad/crop and encode across formats"""

__version__ = "1.0.0"

from .errors import (
    ImageConvertError,
    InvalidArgumentError,
    UnsupportedFormatError,
    EncodeUnsupportedError,
    ImageIOError,
    DecodeError,
    EncodeError,
)
from .options import ProcessOptions, ResizeMode, parse_size, parse_hex_color, parse_resize_mode
from .resize import resize
from .formats import capability_for, decode, encode, resolve_output_format
from .pipeline import ImageProcessor, PipelineStage, ProcessResult, process_image

__all__ = [
    '__version__',
    'ImageConvertError',
    'InvalidArgumentError',
    'UnsupportedFormatError',
    'EncodeUnsupportedError',
    'ImageIOError',
    'DecodeError',
    'EncodeError',
    'ProcessOptions',
    'ResizeMode',
    'parse_size',
    'parse_hex_color',
    'parse_resize_mode',
    'resize',
    'capability_for',
    'decode',
    'encode',
    'resolve_output_format',
    'ImageProcessor',
    'PipelineStage',
    'ProcessResult',
    'process_image',
]
