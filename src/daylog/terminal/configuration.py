# SPDX-License-Identifier: MIT

from typing import Annotated, Optional, cast

import typer
from rich.console import Console
from rich.table import Table

from daylog import configuration
from daylog.model.entity_id import EntityId
from daylog.repository.configuration import CONFIGURATION_REPO
from daylog.service.tracker import TRACKER_SERVICE
from daylog.terminal.custom_typer import AliasedTyperGroup
from daylog.terminal.errors import exit_on_error
from daylog.terminal.parse import parse_timezone
from daylog.time import local_timezone_name

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _configuration_table() -> Table:
    config = CONFIGURATION_REPO.get_config()

    table = Table()
    table.add_column("setting", style="cyan")
    table.add_column("value", style="magenta")

    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row(
        "default_timezone",
        config["default_timezone"] or f"{local_timezone_name()} (system)",
    )
    table.add_row("auth_subject", config["auth_subject"] or "None")
    table.add_row("user_name", config["user_name"])
    table.add_row("user_email", config["user_email"] or "None")
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row(
        "log_level", config.get("log_level", configuration.DEFAULT_LOG_LEVEL)
    )
    return table


@app.command("view, v")
def view() -> None:
    """Show the current settings."""
    console = Console()
    console.print(_configuration_table())


@app.command("set, s")
def set(
    default_timezone: Annotated[
        Optional[str],
        typer.Option(
            "--timezone",
            "-tz",
            help="IANA zone used for new trackers and today's date",
        ),
    ] = None,
    remove_default_timezone: Annotated[
        bool,
        typer.Option("--remove-timezone", help="Use the system timezone"),
    ] = False,
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory path for storing data files",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to the platform default",
        ),
    ] = False,
    user_name: Annotated[
        Optional[str],
        typer.Option("--name", help="Display name of the local user"),
    ] = None,
    user_email: Annotated[
        Optional[str],
        typer.Option("--email", help="Email of the local user"),
    ] = None,
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Show the banner above reports",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help=", ".join(LOG_LEVELS)),
    ] = None,
) -> None:
    """Change settings. Options left out keep their current value."""
    if default_timezone is not None:
        default_timezone = parse_timezone(default_timezone)
    if log_level is not None and log_level.upper() not in LOG_LEVELS:
        raise typer.BadParameter(
            f"Invalid log level: {log_level}. Valid options: {', '.join(LOG_LEVELS)}"
        )

    CONFIGURATION_REPO.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        default_timezone=default_timezone,
        remove_default_timezone=remove_default_timezone,
        user_name=user_name,
        user_email=user_email,
        show_header=show_header,
        log_level=log_level,
    )

    if user_name is not None or user_email is not None:
        with exit_on_error():
            user = TRACKER_SERVICE.resolve_user()
            TRACKER_SERVICE.users.modify_user(
                cast(EntityId, user["id"]), name=user_name, email=user_email
            )

    console = Console()
    console.print("[green]Settings saved[/green]")
    console.print(_configuration_table())
