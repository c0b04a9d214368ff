"""
FILE: marc/core/logs.py
PURPOSE: Logging setup for the CLI
EXPORTS:
  - configure_logging(level) -> None
NOTES:
  - Diagnostics go to stderr through rich's RichHandler
  - Safe to call more than once (replaces the previous handler)
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

_handler = None


def configure_logging(level: int = logging.WARNING) -> None:
    """Attach a stderr RichHandler to the 'marc' logger."""
    global _handler

    logger = logging.getLogger("marc")
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=level <= logging.DEBUG,
        markup=False,
    )
    _handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(_handler)
    logger.setLevel(level)
    logger.propagate = False
