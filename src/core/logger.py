"""Logging configuration for pricebot.

Provides a `pricebot` logger rendered through Rich, configured once.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("pricebot")
# Avoid duplicate lines through the root logger.
logger.propagate = False


def configure_logging(level: str | int = "INFO", *, console: Console | None = None) -> logging.Logger:
    """Attach a RichHandler (once) and set the level."""

    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    if not logger.handlers:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(level)
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Return `pricebot` or a child logger `pricebot.<name>`."""

    if name:
        return logger.getChild(name)
    return logger
