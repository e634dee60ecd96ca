"""CLI logging setup — Rich on STDERR, configured once per invocation."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str) -> None:
    """Send all log records to STDERR through Rich.

    STDOUT is reserved for passthrough data, so nothing here may write to it.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
