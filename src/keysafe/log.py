"""Logging setup — stdlib loggers rendered through Rich on stderr."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_configured = False


def configure_logging(level: str = "WARNING") -> None:
    """Install a single RichHandler on the ``keysafe`` logger."""
    global _configured
    logger = logging.getLogger("keysafe")
    logger.setLevel(level.upper())
    if _configured:
        return
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.propagate = False
    _configured = True
