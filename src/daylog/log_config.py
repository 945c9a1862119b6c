# SPDX-License-Identifier: MIT

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(name)s: %(message)s"


def configure_logging(level: Optional[str]) -> None:
    """Send log records to stderr through rich, at level (default WARNING)."""
    resolved_level = logging.getLevelName((level or "WARNING").upper())
    if not isinstance(resolved_level, int):
        resolved_level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger("daylog")
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(resolved_level)
    root_logger.propagate = False
