# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from daylog.log_config import configure_logging
from daylog.terminal import configuration, tracker
from daylog.terminal.custom_typer import AliasedTyperGroup
from daylog.view import state as view_state

app = typer.Typer(
    cls=AliasedTyperGroup,
    help="daylog - one log per local day for every habit you track",
    no_args_is_help=True,
)
app.add_typer(tracker.app, name="tracker, tr", help="Create, check and backfill trackers")
app.add_typer(configuration.app, name="config, c", help="View or change settings")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option("--no-header", "-nh", help="Hide the banner above reports"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug output to stderr"),
    ] = False,
) -> None:
    if no_header:
        view_state.set_show_header(False)
    if verbose:
        configure_logging("DEBUG")


def run() -> None:
    app()
