# SPDX-License-Identifier: MIT

import logging
import zoneinfo
from typing import Optional, TypeAlias, cast

import pendulum
from pendulum.tz.exceptions import InvalidTimezone as UnknownTimezoneError
from pendulum.tz.exceptions import AmbiguousTime, NonExistingTime

from daylog.exceptions import InvalidTimezone
from daylog.model.local_day import EpochMillis, LocalDay

logger = logging.getLogger(__name__)

Zone: TypeAlias = pendulum.Timezone | pendulum.FixedTimezone

# UTC offsets in use stay within -12:00..+14:00
_GAP_SEARCH_WINDOW_SECONDS = 15 * 60 * 60


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def now_millis() -> EpochMillis:
    return datetime_to_epoch_millis(now_utc())


def get_timezone(name: str) -> Zone:
    """Resolve an IANA zone name, raising InvalidTimezone when it is unknown."""
    try:
        return pendulum.timezone(name)
    except (
        UnknownTimezoneError,
        zoneinfo.ZoneInfoNotFoundError,
        ValueError,
        TypeError,
    ) as error:
        raise InvalidTimezone(str(name)) from error


def local_timezone_name() -> str:
    """IANA name of the system zone, or UTC when the system has none."""
    name = pendulum.local_timezone().name
    try:
        get_timezone(name)
    except InvalidTimezone:
        logger.warning("System timezone %r is not an IANA zone, using UTC", name)
        return "UTC"
    return name


def datetime_to_epoch_millis(datetime: pendulum.DateTime) -> EpochMillis:
    return datetime.int_timestamp * 1000 + datetime.microsecond // 1000


def epoch_millis_to_datetime(
    instant: EpochMillis, timezone: str = "UTC"
) -> pendulum.DateTime:
    zone = get_timezone(timezone)
    seconds, millis = divmod(instant, 1000)
    return pendulum.from_timestamp(seconds, tz=zone).add(microseconds=millis * 1000)


def to_local_day(instant: EpochMillis, timezone: str) -> LocalDay:
    """Return the calendar date of instant as seen on a wall clock in timezone."""
    zone = get_timezone(timezone)
    # Day boundaries fall on whole seconds, so the millisecond part never
    # changes the date.
    local = pendulum.from_timestamp(instant // 1000, tz=zone)
    return LocalDay(local.year, local.month, local.day)


def to_instant(day: LocalDay, timezone: str) -> EpochMillis:
    """
    Return the UTC instant of local midnight of day in timezone.

    A midnight repeated by a fall-back transition resolves to its first
    occurrence. A midnight skipped by a spring-forward transition resolves to
    the first valid instant after it, which is still on day.
    """
    zone = get_timezone(timezone)
    try:
        midnight = pendulum.datetime(
            day.year,
            day.month,
            day.day,
            tz=zone,
            fold=0,
            raise_on_unknown_times=True,
        )
    except AmbiguousTime:
        midnight = pendulum.datetime(day.year, day.month, day.day, tz=zone, fold=0)
    except NonExistingTime:
        midnight = _first_valid_instant_after(day, zone)
    return datetime_to_epoch_millis(midnight)


def _first_valid_instant_after(day: LocalDay, zone: Zone) -> pendulum.DateTime:
    # Wall time only jumps forward across a gap, so the smallest UTC second
    # whose wall time reaches nominal midnight can be found by bisection.
    nominal = pendulum.naive(day.year, day.month, day.day)
    nominal_seconds = pendulum.datetime(day.year, day.month, day.day).int_timestamp

    low = nominal_seconds - _GAP_SEARCH_WINDOW_SECONDS
    high = nominal_seconds + _GAP_SEARCH_WINDOW_SECONDS
    while low < high:
        middle = (low + high) // 2
        if pendulum.from_timestamp(middle, tz=zone).naive() >= nominal:
            high = middle
        else:
            low = middle + 1
    return pendulum.from_timestamp(low, tz=zone)


def local_day_to_str(day: LocalDay) -> str:
    return str(day)


def local_day_from_str(date_str: str) -> LocalDay:
    """Parse a 'YYYY-MM-DD' string into a LocalDay."""
    date = pendulum.Date.fromisoformat(date_str)
    return LocalDay(date.year, date.month, date.day)


def local_day_from_date(date: pendulum.Date) -> LocalDay:
    return LocalDay(date.year, date.month, date.day)


def local_day_to_date(day: LocalDay) -> pendulum.Date:
    return pendulum.date(day.year, day.month, day.day)


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def epoch_millis_to_display_date_str(instant: EpochMillis, timezone: str) -> str:
    """Format an instant as a medium date in timezone, e.g. 'Jan 14, 2026'."""
    return epoch_millis_to_datetime(instant, timezone).format("MMM D, YYYY")


def epoch_millis_to_display_datetime_str(instant: EpochMillis, timezone: str) -> str:
    return epoch_millis_to_datetime(instant, timezone).format("YYYY-MM-DD HH:mm zz")


def datetime_to_display_local_date_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY-MM-DD ddd")
