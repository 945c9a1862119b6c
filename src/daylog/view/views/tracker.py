# SPDX-License-Identifier: MIT

from typing import Optional, cast

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from daylog.model.entity_id import EntityId
from daylog.model.tracker import Tracker
from daylog.model.tracker_log import TrackerLog
from daylog.service.tracker import YearGroup, group_logs_by_year_and_month
from daylog.time import (
    datetime_to_display_local_date_str,
    epoch_millis_to_display_date_str,
    epoch_millis_to_display_datetime_str,
)
from daylog.view.views.header import header

SHORT_ID_LENGTH = 8
ACCOMPLISHED_DOT = "[green]●[/green]"
MISSED_DOT = "[red]●[/red]"


def short_id(id: Optional[EntityId]) -> str:
    return cast(EntityId, id)[:SHORT_ID_LENGTH]


def status_str(log: Optional[TrackerLog]) -> str:
    if log is None:
        return "-"
    return "X" if log["is_accomplished"] else " "


def trackers_view(
    user_name: str,
    trackers: list[Tracker],
    today_logs: dict[EntityId, Optional[TrackerLog]],
) -> None:
    """
    Display trackers with today's status.

    id        name            timezone          started        today
    ──────────────────────────────────────────────────────────────────
    1b2c3d4e  Read 20 pages   Europe/London     Jan 14, 2026   X
    """
    header(user_name, "trackers")

    trackers_table = Table(box=box.SIMPLE)
    trackers_table.add_column("id")
    trackers_table.add_column("name")
    trackers_table.add_column("timezone")
    trackers_table.add_column("started")
    trackers_table.add_column("today")

    for tracker in trackers:
        tracker_id = cast(EntityId, tracker["id"])
        trackers_table.add_row(
            short_id(tracker_id),
            tracker["name"],
            tracker["timezone"],
            epoch_millis_to_display_date_str(
                tracker["start_instant"], tracker["timezone"]
            ),
            status_str(today_logs.get(tracker_id)),
        )

    console = Console()
    console.print(trackers_table)


def single_tracker_view(
    user_name: str,
    tracker: Tracker,
    logs: list[TrackerLog],
) -> None:
    """Display a tracker's properties followed by its history dashboard."""
    header(user_name, "tracker")

    tracker_table = Table(box=box.SIMPLE)
    tracker_table.add_column("property")
    tracker_table.add_column("value")

    tracker_table.add_row("id", cast(EntityId, tracker["id"]))
    tracker_table.add_row("name", tracker["name"])
    tracker_table.add_row("description", tracker["description"] or "")
    tracker_table.add_row("timezone", tracker["timezone"])
    tracker_table.add_row(
        "started",
        epoch_millis_to_display_datetime_str(
            tracker["start_instant"], tracker["timezone"]
        ),
    )
    tracker_table.add_row("logs", str(len(logs)))
    tracker_table.add_row(
        "accomplished", str(sum(1 for log in logs if log["is_accomplished"]))
    )
    tracker_table.add_row("updated", datetime_to_display_local_date_str(tracker["updated"]))

    console = Console()
    console.print(tracker_table)

    dashboard_view(group_logs_by_year_and_month(logs))


def dashboard_view(year_groups: list[YearGroup]) -> None:
    """
    Display one dot per day, a row per month, newest first.

    2026
      Feb  ●●●●●●                          4/6
      Jan  ●●●●●●●●●●●●●●●●●●●●●●●●●●●●●●●  20/31
    """
    console = Console()
    for year_group in year_groups:
        console.print(f"[bold]{year_group['year']}[/bold]")

        month_table = Table(box=None, show_header=False, padding=(0, 1, 0, 2))
        month_table.add_column("month")
        month_table.add_column("days")
        month_table.add_column("done", justify="right")

        for month_group in year_group["months"]:
            month_logs = month_group["logs"]
            dots = "".join(
                ACCOMPLISHED_DOT if log["is_accomplished"] else MISSED_DOT
                for log in month_logs
            )
            accomplished = sum(1 for log in month_logs if log["is_accomplished"])
            month_table.add_row(
                pendulum.date(year_group["year"], month_group["month"], 1).format(
                    "MMM"
                ),
                dots,
                f"{accomplished}/{len(month_logs)}",
            )

        console.print(month_table)


def tracker_logs_view(
    user_name: str,
    tracker: Tracker,
    logs: list[TrackerLog],
    report_name: str = "tracker-logs",
) -> None:
    """Display logs one row per local day."""
    header(user_name, report_name)

    console = Console()
    console.print(f"\n[bold]{tracker['name']}[/bold]")

    logs_table = Table(box=box.SIMPLE)
    logs_table.add_column("day")
    logs_table.add_column("local midnight")
    logs_table.add_column("timezone")
    logs_table.add_column("done")

    for log in logs:
        logs_table.add_row(
            str(log["local_day"]),
            epoch_millis_to_display_datetime_str(
                log["canonical_instant"], log["timezone"]
            ),
            log["timezone"],
            status_str(log),
        )

    console.print(logs_table)
