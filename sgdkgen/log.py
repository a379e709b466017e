"""
Logging setup for the sgdkgen CLI.

Library modules only call logging.getLogger(__name__); the CLI decides where
the records go.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "sgdkgen"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Route the sgdkgen logger to stderr through rich.

    Safe to call more than once; the previous handler is replaced.

    Args:
        verbose: DEBUG instead of WARNING

    Returns:
        The configured package logger
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(LOGGER_NAME)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(level)

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
