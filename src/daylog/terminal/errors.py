# SPDX-License-Identifier: MIT

import logging
from contextlib import contextmanager
from typing import Iterator

import typer
from rich.console import Console

from daylog.exceptions import DaylogError

logger = logging.getLogger(__name__)


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Print domain errors and exit with status 1 instead of a traceback."""
    try:
        yield
    except DaylogError as error:
        logger.debug("Command failed", exc_info=error)
        Console(stderr=True).print(f"[red]{error}[/red]")
        raise typer.Exit(1)
