# SPDX-License-Identifier: MIT

from daylog.exceptions import InvalidRange
from daylog.model.local_day import LocalDay
from daylog.time import local_day_from_date, local_day_to_date


def next_day(day: LocalDay) -> LocalDay:
    """Return the civil day after day, rolling over months and years."""
    return local_day_from_date(local_day_to_date(day).add(days=1))


def days_between(start: LocalDay, end: LocalDay) -> int:
    """Number of civil days from start to end; negative when end is earlier."""
    return local_day_to_date(start).diff(local_day_to_date(end), False).in_days()


def enumerate_days(start: LocalDay, end: LocalDay) -> list[LocalDay]:
    """
    List every civil day from start to end, both inclusive, in calendar order.

    Days are calendar units, not 24 hour spans, so DST never adds or drops one.
    Raises InvalidRange when start is after end.
    """
    if start > end:
        raise InvalidRange(start, end)

    days: list[LocalDay] = []
    current_date = local_day_to_date(start)
    end_date = local_day_to_date(end)
    while current_date <= end_date:
        days.append(local_day_from_date(current_date))
        current_date = current_date.add(days=1)

    return days
