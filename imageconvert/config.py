"""
Default option values from an INI file

Example imageconvert.ini:

    [Options]
    Width = 1024
    Height = 768
    Mode = fill
    Quality = 90
    Format = webp
    Pad_Color = #000000
"""

from configparser import ConfigParser, Error as ConfigParserError
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .errors import InvalidArgumentError
from .options import parse_hex_color, parse_resize_mode, parse_size


CONFIG_FILENAME = "imageconvert.ini"
CONFIG_SECTION = "Options"


def find_config(explicit: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """
    Locate the config file.

    Args:
        explicit: Path given on the command line, must exist when set

    Returns:
        Path to the config file, or None when no file applies

    Raises:
        InvalidArgumentError: If an explicit path does not exist
    """
    if explicit is not None:
        path = Path(explicit)
        if not path.is_file():
            raise InvalidArgumentError(f"Config file not found: {path}")
        return path

    default = Path.cwd() / CONFIG_FILENAME
    return default if default.is_file() else None


def _get_int(parser: ConfigParser, key: str) -> int:
    raw = parser.get(CONFIG_SECTION, key)
    try:
        return int(raw)
    except ValueError:
        raise InvalidArgumentError(f"Config [{CONFIG_SECTION}] {key} must be an integer, got {raw!r}") from None


def load_config(path: Optional[Union[str, Path]]) -> Dict[str, Any]:
    """
    Read option defaults from the [Options] section.

    Args:
        path: INI file path, or None for no config

    Returns:
        Dict with any of: width, height, mode, quality, output_format, pad_color

    Raises:
        InvalidArgumentError: If the file is malformed or a value is invalid
    """
    if path is None:
        return {}

    parser = ConfigParser()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            parser.read_file(f)
    except (OSError, ConfigParserError) as e:
        raise InvalidArgumentError(f"Could not read config file {path}: {e}") from e

    if not parser.has_section(CONFIG_SECTION):
        return {}

    values: Dict[str, Any] = {}

    # Keys are case-insensitive (ConfigParser lower-cases them)
    if parser.has_option(CONFIG_SECTION, 'Width'):
        values['width'] = _get_int(parser, 'Width')
    if parser.has_option(CONFIG_SECTION, 'Height'):
        values['height'] = _get_int(parser, 'Height')
    if parser.has_option(CONFIG_SECTION, 'Size'):
        values['width'], values['height'] = parse_size(parser.get(CONFIG_SECTION, 'Size'))
    if parser.has_option(CONFIG_SECTION, 'Mode'):
        values['mode'] = parse_resize_mode(parser.get(CONFIG_SECTION, 'Mode'))
    if parser.has_option(CONFIG_SECTION, 'Quality'):
        values['quality'] = _get_int(parser, 'Quality')
    if parser.has_option(CONFIG_SECTION, 'Format'):
        values['output_format'] = parser.get(CONFIG_SECTION, 'Format').strip() or None
    if parser.has_option(CONFIG_SECTION, 'Pad_Color'):
        values['pad_color'] = parse_hex_color(parser.get(CONFIG_SECTION, 'Pad_Color'))

    return values
