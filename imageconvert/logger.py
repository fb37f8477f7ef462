"""
Logging setup for the imageconvert command
Console output through rich, optional plain-text log file
"""

import logging
from pathlib import Path
from typing import Optional, Union

from rich.logging import RichHandler

from .textio import error_console


LOGGER_NAME = "imageconvert"
FILE_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def setup_logging(
    verbose: bool = False,
    log_file: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        verbose: Show DEBUG records on the console instead of WARNING and up
        log_file: Optional path; receives every record at DEBUG level

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    close_logging()
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    console = RichHandler(
        console=error_console,
        show_path=False,
        show_time=verbose,
        markup=False,
    )
    console.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.addHandler(console)

    if log_file is not None:
        handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(handler)

    return logger


def close_logging() -> None:
    """Detach and close every handler added by setup_logging."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
