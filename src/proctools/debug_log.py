"""Logging setup for the command-line interface."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_handler: RichHandler | None = None


def setup_logging(verbose: bool = False) -> None:
    """Attach a stderr ``RichHandler`` to the ``proctools`` logger.

    This is idempotent; later calls only adjust the level.
    """
    global _handler
    logger = logging.getLogger("proctools")
    level = logging.DEBUG if verbose else logging.WARNING

    if _handler is None:
        _handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=False,
        )
        _handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(_handler)

    _handler.setLevel(level)
    logger.setLevel(level)
