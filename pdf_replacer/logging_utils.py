"""Logging setup for the command line tool."""

import logging
import sys

from .config import DEFAULT_VERBOSE

_VERBOSE_LEVELS = {
    0: logging.ERROR,
    1: logging.WARNING,
    2: logging.INFO,
    3: logging.DEBUG,
}


def verbose_to_level(verbose):
    """
    Map a verbosity setting to a logging level.

    Args:
        verbose (int): 0=only errors, 1=standard output, 2=detailed output, 3=debug output.

    Returns:
        int: The matching ``logging`` level. Values above 3 clamp to DEBUG.
    """
    if verbose is None:
        verbose = DEFAULT_VERBOSE
    verbose = max(0, min(int(verbose), 3))
    return _VERBOSE_LEVELS[verbose]


def configure_logging(verbose=DEFAULT_VERBOSE):
    """Send package logs to stderr; stdout may be carrying the output PDF."""
    logger = logging.getLogger("pdf_replacer")
    logger.setLevel(verbose_to_level(verbose))

    # Prevent duplicate handlers when called more than once
    for handler in list(logger.handlers):
        if getattr(handler, "_pdf_replacer", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    handler._pdf_replacer = True
    logger.addHandler(handler)
    return logger
