# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from daylog.exceptions import InvalidTimezone
from daylog.model.local_day import EpochMillis, LocalDay
from daylog.service.day_range import next_day
from daylog.time import (
    datetime_to_epoch_millis,
    get_timezone,
    local_day_from_str,
    to_instant,
    to_local_day,
)


def _relative_day(value: str, timezone: str, now: EpochMillis) -> Optional[LocalDay]:
    today = to_local_day(now, timezone)
    if value == "today" or value == "t":
        return today
    if value == "yesterday" or value == "y":
        date = pendulum.date(today.year, today.month, today.day).subtract(days=1)
        return LocalDay(date.year, date.month, date.day)
    if value == "tomorrow" or value == "o":
        return next_day(today)
    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", value):
        date = pendulum.date(today.year, today.month, today.day).add(days=int(value))
        return LocalDay(date.year, date.month, date.day)
    return None


def parse_local_day(value: Optional[str], timezone: str, now: EpochMillis) -> LocalDay:
    """Parse YYYY-MM-DD, today/yesterday/tomorrow or a day offset; default today."""
    if value is None:
        return to_local_day(now, timezone)

    relative_day = _relative_day(value, timezone, now)
    if relative_day is not None:
        return relative_day

    if re.match(r"^\d{4}-\d{2}-\d{2}$", value):
        try:
            return local_day_from_str(value)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date: {e}")

    raise typer.BadParameter("Incorrect date format")


def parse_instant(value: Optional[str], timezone: str, now: EpochMillis) -> EpochMillis:
    """
    Parse a point in time as seen in timezone.

    Accepts now, a relative day (local midnight of that day), or
    YYYY-MM-DD with an optional HH:mm time of day. Defaults to now.
    """
    if value is None or value == "now" or value == "n":
        return now

    relative_day = _relative_day(value, timezone, now)
    if relative_day is not None:
        return to_instant(relative_day, timezone)

    if re.match(r"\d{4}-\d{2}-\d{2}", value):
        try:
            parsed = pendulum.parse(value, tz=get_timezone(timezone))
        except ValueError as e:
            raise typer.BadParameter(f"Invalid datetime: {e}")
        if not isinstance(parsed, pendulum.DateTime):
            raise typer.BadParameter("Expected a date with an optional time")
        return datetime_to_epoch_millis(parsed)

    raise typer.BadParameter("Incorrect datetime format")


def parse_timezone(value: str) -> str:
    try:
        get_timezone(value)
    except InvalidTimezone as e:
        raise typer.BadParameter(str(e))
    return value
