"""
Package logger for ghforks.

Everything logged here goes to standard error; standard output is
reserved for fork URLs.
"""

import logging
import sys


LOGGER_NAME = "ghforks"
LOG_FORMAT = "git-ls-github-forks: %(levelname)s: %(message)s"


def setup_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Return the named logger with a single stderr handler attached."""

    _logger = logging.getLogger(name)
    if not _logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        _logger.addHandler(handler)
    _logger.setLevel(logging.INFO)
    return _logger


def set_verbose(verbose: bool) -> None:
    """Switch the package logger between DEBUG and INFO."""

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


logger = setup_logger()
