"""imageconvert - resize and convert raster images.

Usage:
    imageconvert input.jpg output.png -w 800 -H 600
    imageconvert -i input.png -o output.jpg -s 1024x768 -q 90
    imageconvert input.gif output.webp -s 300x300 -m stretch -p "#FF0000"
    imageconvert -i input.heic output.jpg
    imageconvert --list-formats
"""

from __future__ import annotations

import argparse
import logging
from typing import Any

from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import find_config, load_config
from .errors import ImageConvertError, InvalidArgumentError
from .formats import capability_for, iter_capabilities, format_availability, resolve_output_format
from .logger import setup_logging, close_logging
from .options import (
    DEFAULT_HEIGHT,
    DEFAULT_PAD_COLOR,
    DEFAULT_QUALITY,
    DEFAULT_WIDTH,
    ProcessOptions,
    ResizeMode,
    parse_hex_color,
    parse_resize_mode,
    parse_size,
)
from .pipeline import process_image
from .textio import console, print_error, print_info, print_warning


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imageconvert",
        description="Resize, crop, pad and convert images between formats.",
        epilog="Examples:\n"
               "  imageconvert -i input.jpg -o output.png -w 800 -H 600\n"
               "  imageconvert input.png output.jpg -s 1024x768 -q 90\n"
               "  imageconvert input.gif output.webp -s 300x300 -m stretch -p \"#FF0000\"\n"
               "  imageconvert input.jpg output.png\n",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    # Defaults stay None so config file values can fill the gaps
    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="[INPUT] OUTPUT; with one file it is the output and -i gives the input",
    )
    parser.add_argument("-i", "--input", help="Input image file")
    parser.add_argument("-o", "--output", help="Output image file")
    parser.add_argument("-w", "--width", type=int, help=f"Target width (default {DEFAULT_WIDTH})")
    parser.add_argument("-H", "--height", type=int, help=f"Target height (default {DEFAULT_HEIGHT})")
    parser.add_argument("-s", "--size", help="Target size as WIDTHxHEIGHT, overrides --width/--height")
    parser.add_argument(
        "-m", "--mode",
        help="Resize mode: fit, fill or stretch (default fit)",
    )
    parser.add_argument(
        "-q", "--quality",
        type=int,
        help=f"Output quality 1-100 for JPEG, WebP and AVIF (default {DEFAULT_QUALITY})",
    )
    parser.add_argument(
        "-f", "--format",
        help="Output format (jpg, png, webp, ...); default is the output file extension",
    )
    parser.add_argument(
        "-p", "--pad-color",
        help="Padding color for fit mode as #RRGGBB (default #FFFFFF)",
    )
    parser.add_argument("--config", help="INI file with default options ([Options] section)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    parser.add_argument("--log-file", help="Also write the log to this file")
    parser.add_argument(
        "--list-formats",
        action="store_true",
        help="Show which formats can be read and written, then exit",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_paths(args: argparse.Namespace) -> tuple[str, str]:
    """Combine positional files with -i/-o. Positionals take precedence."""
    input_file, output_file = args.input, args.output

    if len(args.files) > 2:
        raise InvalidArgumentError(
            "too many arguments: expected at most 2 arguments (input and output files)"
        )
    elif len(args.files) == 2:
        input_file, output_file = args.files
    elif len(args.files) == 1:
        output_file = args.files[0]

    if not input_file:
        raise InvalidArgumentError("input file is required")
    if not output_file:
        raise InvalidArgumentError("output file is required")

    return input_file, output_file


def build_options(args: argparse.Namespace, config: dict[str, Any]) -> ProcessOptions:
    """
    Merge built-in defaults, config file values and command-line flags.

    Args:
        args: Parsed command-line arguments
        config: Values from load_config()

    Returns:
        Validated ProcessOptions
    """
    values: dict[str, Any] = {
        'width': DEFAULT_WIDTH,
        'height': DEFAULT_HEIGHT,
        'mode': ResizeMode.FIT,
        'quality': DEFAULT_QUALITY,
        'output_format': None,
        'pad_color': DEFAULT_PAD_COLOR,
    }
    values.update(config)

    if args.width is not None:
        values['width'] = args.width
    if args.height is not None:
        values['height'] = args.height
    if args.size:
        values['width'], values['height'] = parse_size(args.size)
    if args.mode is not None:
        values['mode'] = parse_resize_mode(args.mode)
    if args.quality is not None:
        values['quality'] = args.quality
    if args.format:
        values['output_format'] = args.format
    if args.pad_color is not None:
        values['pad_color'] = parse_hex_color(args.pad_color)

    return ProcessOptions(**values)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

def _yes_no(flag: bool) -> str:
    return "[green]yes[/green]" if flag else "[red]no[/red]"


def print_format_table() -> None:
    """Print the decode/encode support matrix."""
    availability = format_availability()
    plugin_for = {'AVIF': 'avif', 'HEIF': 'heif', 'JXL': 'jxl'}

    table = Table(title="Supported formats")
    table.add_column("Extension", no_wrap=True)
    table.add_column("Format", no_wrap=True)
    table.add_column("Decode", justify="center")
    table.add_column("Encode", justify="center")
    table.add_column("Quality", justify="center")
    table.add_column("Notes")

    for capability in iter_capabilities():
        notes = capability.decode_reason or capability.encode_reason
        plugin = plugin_for.get(capability.format_name)
        if plugin and not availability[plugin]:
            notes = f"codec not installed (pip install imageconvert[{plugin}])"
        encoder = capability.encoder
        table.add_row(
            f".{capability.extension}",
            capability.format_name,
            _yes_no(capability.can_decode),
            _yes_no(capability.can_encode),
            "1-100" if encoder is not None and encoder.supports_quality else "-",
            escape(notes),
        )

    console.print(table)


def _warn_ignored_quality(args: argparse.Namespace, options: ProcessOptions, output_file: str) -> None:
    if args.quality is None:
        return
    capability = capability_for(resolve_output_format(output_file, options.output_format))
    if capability is not None and capability.can_encode and not capability.encoder.supports_quality:
        print_warning(f"--quality is ignored for {capability.format_name} output")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_formats:
        print_format_table()
        return 0

    try:
        input_file, output_file = resolve_paths(args)
        options = build_options(args, load_config(find_config(args.config)))
    except InvalidArgumentError as e:
        parser.error(str(e))

    try:
        setup_logging(verbose=args.verbose, log_file=args.log_file)
    except OSError as e:
        print_error(f"Could not open log file {args.log_file}: {e}")
        return 1

    try:
        _warn_ignored_quality(args, options, output_file)
        process_image(input_file, output_file, options)
    except ImageConvertError as e:
        logger.debug("Conversion failed", exc_info=True)
        print_error(str(e))
        return 1
    finally:
        close_logging()

    print_info(f"Image processed successfully: {input_file} -> {output_file}")
    return 0
