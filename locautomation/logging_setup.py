"""Logging configuration for the localization automation."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "locautomation"


def configure_logging(verbose: bool = False, console: Optional[Console] = None) -> logging.Logger:
    """
    Route package logging through a rich handler.

    Calling this again only adjusts the level.

    Args:
        verbose: Log debug messages as well
        console: Console to render on (a stderr console if not provided)

    Returns:
        The package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger
