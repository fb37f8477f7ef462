"""Single image pipeline: decode, resize, encode, write"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, Union

from .errors import ImageIOError
from .formats import decode, encode, resolve_output_format
from .options import ProcessOptions
from .resize import resize


logger = logging.getLogger(__name__)


class PipelineStage(Enum):
    """Linear pipeline states; any failure jumps to FAILED."""

    IDLE = 'idle'
    DECODING = 'decoding'
    RESIZING = 'resizing'
    ENCODING = 'encoding'
    DONE = 'done'
    FAILED = 'failed'


@dataclass
class ProcessResult:
    """Outcome of a successful pipeline run.

    Attributes:
        input_path: Source image path
        output_path: Written image path
        format_used: Format name of the output (JPEG, PNG, ...)
        dimensions: Output dimensions (width, height)
        size_bytes: Size of the written file
    """
    input_path: Path
    output_path: Path
    format_used: str
    dimensions: Tuple[int, int]
    size_bytes: int


class ImageProcessor:
    """Runs the decode -> resize -> encode pipeline for one image at a time."""

    def __init__(self, options: Optional[ProcessOptions] = None):
        """
        Initialize processor.

        Args:
            options: ProcessOptions to apply, defaults when None
        """
        self.options = options or ProcessOptions()
        self.stage = PipelineStage.IDLE

    def process(
        self,
        input_path: Union[str, Path],
        output_path: Union[str, Path]
    ) -> ProcessResult:
        """
        Convert a single image.

        The encoded file is built in memory first, so the output path is only
        touched once encoding has succeeded.

        Args:
            input_path: Image to read
            output_path: Where to write the result

        Returns:
            ProcessResult describing the written file

        Raises:
            ImageConvertError: Any stage failure, re-raised after stage is FAILED
        """
        input_path = Path(input_path)
        output_path = Path(output_path)
        self.stage = PipelineStage.IDLE
        output_format = resolve_output_format(output_path, self.options.output_format)

        try:
            self.stage = PipelineStage.DECODING
            image = decode(input_path)

            self.stage = PipelineStage.RESIZING
            logger.debug(
                "Resizing %dx%d -> %dx%d (%s)",
                image.width, image.height,
                self.options.width, self.options.height, self.options.mode.value,
            )
            image = resize(image, self.options)

            self.stage = PipelineStage.ENCODING
            result = encode(image, output_format, self.options.quality)
            write_output(output_path, result.encoded_bytes)
        except Exception:
            self.stage = PipelineStage.FAILED
            raise

        self.stage = PipelineStage.DONE
        logger.info(
            "Converted %s -> %s (%s, %dx%d, %d bytes)",
            input_path, output_path, result.format_used,
            result.dimensions[0], result.dimensions[1], result.size_bytes,
        )
        return ProcessResult(
            input_path=input_path,
            output_path=output_path,
            format_used=result.format_used,
            dimensions=result.dimensions,
            size_bytes=result.size_bytes,
        )


def write_output(output_path: Path, data: bytes) -> None:
    """
    Write encoded bytes, removing the file again if the write fails.

    Args:
        output_path: Destination file path
        data: Complete file contents

    Raises:
        ImageIOError: If the file cannot be created or written
    """
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fp = open(output_path, 'wb')
    except OSError as e:
        raise ImageIOError(output_path, e, action='create') from e

    try:
        with fp:
            fp.write(data)
    except OSError as e:
        # A truncated file must not look like a valid result
        output_path.unlink(missing_ok=True)
        raise ImageIOError(output_path, e, action='write') from e


def process_image(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    options: Optional[ProcessOptions] = None
) -> ProcessResult:
    """Convert one image with the given options. See ImageProcessor.process."""
    return ImageProcessor(options).process(input_path, output_path)
