"""Errors raised by the conversion pipeline"""

from pathlib import Path
from typing import Optional, Union


class ImageConvertError(Exception):
    """Base class for every error the pipeline reports."""
    pass


class InvalidArgumentError(ImageConvertError, ValueError):
    """Bad size string, hex color, resize mode or other option value."""
    pass


class UnsupportedFormatError(ImageConvertError):
    """Format is unknown, or not supported in the requested direction."""

    def __init__(self, format: str, message: Optional[str] = None):
        self.format = format
        super().__init__(message or f"Unsupported image format: {format}")


class EncodeUnsupportedError(UnsupportedFormatError):
    """Format can be read but no installed library is able to write it."""

    def __init__(self, format: str, reason: str):
        self.reason = reason
        super().__init__(
            format,
            f"Encoding to {format.upper()} format is not supported: {reason}"
        )


class ImageIOError(ImageConvertError, OSError):
    """Input could not be opened, or output could not be created/written."""

    def __init__(self, path: Union[str, Path], cause: BaseException, action: str = 'open'):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to {action} file {self.path}: {cause}")


class DecodeError(ImageConvertError):
    """Underlying decoder failed on the input data."""

    def __init__(self, format: str, cause: BaseException):
        self.format = format
        self.cause = cause
        super().__init__(f"Failed to decode {format.upper()} image: {cause}")


class EncodeError(ImageConvertError):
    """Underlying encoder failed while producing output data."""

    def __init__(self, format: str, cause: BaseException):
        self.format = format
        self.cause = cause
        super().__init__(f"Failed to encode {format.upper()} image: {cause}")
