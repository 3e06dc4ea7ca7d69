"""Console logging configuration."""

from __future__ import annotations

import logging

LOGGER_NAME = "chequetrack"

_CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_VERBOSE_FORMAT = "[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the ``chequetrack`` logger for CLI use.

    Warnings and errors go to stderr by default; ``verbose`` lowers the
    threshold to DEBUG and switches to a format with call sites.

    Args:
        verbose: Enable debug output

    Returns:
        Configured package logger
    """
    root_logger = logging.getLogger(LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Remove existing handlers to avoid duplicates on repeated CLI invocations
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        logging.Formatter(
            fmt=_VERBOSE_FORMAT if verbose else _CONSOLE_FORMAT,
            datefmt="%H:%M:%S" if verbose else "%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(console_handler)

    return root_logger

