"""Diagnostic logging setup.

Operator-facing output goes through the rich console; loguru carries
command traces and best-effort failures on stderr.
"""

import sys

from loguru import logger

DEFAULT_LEVEL = "WARNING"
VERBOSE_LEVEL = "DEBUG"
LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"


def configure_logging(verbose: bool = False) -> None:
    """Route loguru output to stderr at the requested verbosity."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=VERBOSE_LEVEL if verbose else DEFAULT_LEVEL,
        format=LOG_FORMAT,
        colorize=None,
    )
