# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console

from daylog.model.entity_id import EntityId
from daylog.model.tracker_log import TrackerLog
from daylog.repository.configuration import CONFIGURATION_REPO
from daylog.service.tracker import TRACKER_SERVICE
from daylog.terminal.custom_typer import AliasedTyperGroup
from daylog.terminal.errors import exit_on_error
from daylog.terminal.parse import parse_instant, parse_local_day, parse_timezone
from daylog.time import local_timezone_name, now_millis, to_local_day
from daylog.view.views import tracker as tracker_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _current_timezone() -> str:
    default_timezone = CONFIGURATION_REPO.get_config()["default_timezone"]
    if default_timezone is not None:
        return default_timezone
    return local_timezone_name()


def _user_name() -> str:
    return TRACKER_SERVICE.resolve_user()["name"]


def _resolve_tracker_id(id: str) -> EntityId:
    return TRACKER_SERVICE.trackers.resolve_id(id)


@app.command("add, a", no_args_is_help=True)
def add(
    name: str,
    start: Annotated[
        Optional[str],
        typer.Option(
            "--start",
            "-s",
            help="now, today, yesterday, a day offset, or YYYY-MM-DD [HH:mm]",
        ),
    ] = None,
    timezone: Annotated[
        Optional[str],
        typer.Option("--timezone", "-tz", help="IANA zone, e.g. Europe/London"),
    ] = None,
    description: Annotated[
        Optional[str],
        typer.Option("--description", "-d"),
    ] = None,
) -> None:
    """Create a tracker with one log per day from its start through today."""
    tracker_timezone = parse_timezone(timezone or _current_timezone())
    now = now_millis()
    start_instant = parse_instant(start, tracker_timezone, now)

    with exit_on_error():
        tracker_id = TRACKER_SERVICE.create_tracker(
            name, start_instant, tracker_timezone, now, description
        )
        tracker = TRACKER_SERVICE.get_owned_tracker(tracker_id)
        logs = TRACKER_SERVICE.list_logs_for_tracker(tracker_id)
        tracker_report.single_tracker_view(_user_name(), tracker, logs)


@app.command("list, ls")
def list_trackers() -> None:
    """List trackers with today's status."""
    now = now_millis()
    with exit_on_error():
        trackers = TRACKER_SERVICE.list_trackers()
        today_logs: dict[EntityId, Optional[TrackerLog]] = {}
        for tracker in trackers:
            tracker_id = tracker["id"]
            if tracker_id is None:
                continue
            today = to_local_day(now, tracker["timezone"])
            logs = TRACKER_SERVICE.list_logs(
                tracker_id, "month", today.month, today.year
            )
            matches = [log for log in logs if log["local_day"] == today]
            today_logs[tracker_id] = matches[0] if matches else None

        tracker_report.trackers_view(_user_name(), trackers, today_logs)


@app.command("show, sh", no_args_is_help=True)
def show(id: str) -> None:
    """Show a tracker and its history dashboard."""
    with exit_on_error():
        tracker_id = _resolve_tracker_id(id)
        tracker = TRACKER_SERVICE.get_owned_tracker(tracker_id)
        logs = TRACKER_SERVICE.list_logs_for_tracker(tracker_id)
        tracker_report.single_tracker_view(_user_name(), tracker, logs)


@app.command("logs, l", no_args_is_help=True)
def logs(
    id: str,
    month: Annotated[
        Optional[int],
        typer.Option("--month", "-m", min=1, max=12, help="Defaults to this month"),
    ] = None,
    year: Annotated[
        Optional[int],
        typer.Option("--year", "-y", help="Defaults to this year"),
    ] = None,
    whole_year: Annotated[
        bool,
        typer.Option("--whole-year", "-wy", help="Show every month of the year"),
    ] = False,
) -> None:
    """Show a tracker's logs for a month or a year."""
    today = to_local_day(now_millis(), _current_timezone())
    with exit_on_error():
        tracker_id = _resolve_tracker_id(id)
        tracker = TRACKER_SERVICE.get_owned_tracker(tracker_id)
        tracker_logs = TRACKER_SERVICE.list_logs(
            tracker_id,
            "year" if whole_year else "month",
            month if month is not None else today.month,
            year if year is not None else today.year,
        )
        tracker_report.tracker_logs_view(_user_name(), tracker, tracker_logs)


@app.command("check, c", no_args_is_help=True)
def check(
    id: str,
    day: Annotated[
        Optional[str],
        typer.Option(
            "--day",
            "-d",
            help="today, yesterday, a day offset, or YYYY-MM-DD",
        ),
    ] = None,
    undo: Annotated[
        bool,
        typer.Option("--undo", "-u", help="Mark the day as not accomplished"),
    ] = False,
) -> None:
    """Mark a day (today by default) as accomplished."""
    local_day = parse_local_day(day, _current_timezone(), now_millis())
    with exit_on_error():
        tracker_id = _resolve_tracker_id(id)
        log = TRACKER_SERVICE.update_status(tracker_id, local_day, not undo)
        tracker = TRACKER_SERVICE.get_owned_tracker(tracker_id)
        tracker_report.tracker_logs_view(
            _user_name(), tracker, [log], report_name="tracker-check"
        )


@app.command("backfill, b")
def backfill(
    id: Annotated[
        Optional[str],
        typer.Argument(help="Tracker to backfill; all trackers when omitted"),
    ] = None,
    timezone: Annotated[
        Optional[str],
        typer.Option(
            "--timezone",
            "-tz",
            help="Zone to create the new days in; defaults to the tracker's",
        ),
    ] = None,
) -> None:
    """Create the daily logs missing since each tracker was last brought up to date."""
    if timezone is not None:
        timezone = parse_timezone(timezone)
    now = now_millis()
    console = Console()

    with exit_on_error():
        if id is not None:
            tracker_ids = [_resolve_tracker_id(id)]
        else:
            tracker_ids = [
                tracker["id"]
                for tracker in TRACKER_SERVICE.list_trackers()
                if tracker["id"] is not None
            ]

        for tracker_id in tracker_ids:
            tracker = TRACKER_SERVICE.get_owned_tracker(tracker_id)
            result = TRACKER_SERVICE.backfill_tracker(tracker_id, now, timezone)
            console.print(
                f"{tracker['name']}: {result['created']} new "
                f"{'day' if result['created'] == 1 else 'days'}"
            )


@app.command("delete, d", no_args_is_help=True)
def delete(
    id: str,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Delete without confirmation"),
    ] = False,
) -> None:
    """Delete a tracker and all of its logs."""
    with exit_on_error():
        tracker_id = _resolve_tracker_id(id)
        tracker = TRACKER_SERVICE.get_owned_tracker(tracker_id)
        if not yes:
            typer.confirm(
                f"Delete '{tracker['name']}' and all of its logs?", abort=True
            )
        deleted_logs = TRACKER_SERVICE.delete_tracker(tracker_id)

    Console().print(f"Deleted '{tracker['name']}' and {deleted_logs} logs")
