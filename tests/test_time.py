import pendulum
import pytest

from daylog.exceptions import InvalidTimezone
from daylog.model.local_day import LocalDay
from daylog.service.day_range import enumerate_days, next_day
from daylog.time import (
    datetime_to_epoch_millis,
    epoch_millis_to_datetime,
    get_timezone,
    local_day_from_str,
    to_instant,
    to_local_day,
)


def utc(year, month, day, hour=0, minute=0, second=0, millisecond=0) -> int:
    return datetime_to_epoch_millis(
        pendulum.datetime(year, month, day, hour, minute, second, millisecond * 1000)
    )


@pytest.mark.parametrize(
    "instant, timezone, expected",
    [
        (utc(2026, 1, 14, 12), "UTC", LocalDay(2026, 1, 14)),
        (utc(2026, 1, 14, 20), "Asia/Tokyo", LocalDay(2026, 1, 15)),
        (utc(2026, 1, 14, 2), "America/Los_Angeles", LocalDay(2026, 1, 13)),
        (utc(2026, 1, 14, 20), "Asia/Kolkata", LocalDay(2026, 1, 15)),
        (utc(2026, 1, 14, 18, 14), "Asia/Kathmandu", LocalDay(2026, 1, 14)),
        (utc(2026, 1, 14, 18, 15), "Asia/Kathmandu", LocalDay(2026, 1, 15)),
        (utc(2026, 1, 14, 10, 14, 59, 999), "Pacific/Chatham", LocalDay(2026, 1, 14)),
        (utc(2026, 1, 14, 10, 15), "Pacific/Chatham", LocalDay(2026, 1, 15)),
        (utc(2026, 1, 13, 12), "Pacific/Kiritimati", LocalDay(2026, 1, 14)),
        (utc(2026, 1, 14, 10), "Etc/GMT+12", LocalDay(2026, 1, 13)),
        (utc(2026, 1, 13, 23, 59, 59, 999), "UTC", LocalDay(2026, 1, 13)),
    ],
)
def test_to_local_day(instant, timezone, expected):
    assert to_local_day(instant, timezone) == expected


@pytest.mark.parametrize(
    "day, timezone, expected",
    [
        (LocalDay(2026, 1, 14), "UTC", utc(2026, 1, 14)),
        (LocalDay(2026, 1, 14), "Asia/Tokyo", utc(2026, 1, 13, 15)),
        (LocalDay(2026, 1, 14), "Asia/Kathmandu", utc(2026, 1, 13, 18, 15)),
        # US spring forward happens at 02:00, after midnight
        (LocalDay(2026, 3, 8), "America/New_York", utc(2026, 3, 8, 5)),
        (LocalDay(2026, 3, 9), "America/New_York", utc(2026, 3, 9, 4)),
        (LocalDay(2026, 11, 1), "America/New_York", utc(2026, 11, 1, 4)),
        (LocalDay(2026, 11, 2), "America/New_York", utc(2026, 11, 2, 5)),
        (LocalDay(2026, 3, 29), "Europe/London", utc(2026, 3, 29)),
        (LocalDay(2026, 3, 30), "Europe/London", utc(2026, 3, 29, 23)),
    ],
)
def test_to_instant(day, timezone, expected):
    assert to_instant(day, timezone) == expected


def test_skipped_midnight_resolves_to_first_valid_instant():
    # Chile springs forward from 00:00 -04 straight to 01:00 -03
    instant = to_instant(LocalDay(2024, 9, 8), "America/Santiago")

    assert instant == utc(2024, 9, 8, 4)
    local = epoch_millis_to_datetime(instant, "America/Santiago")
    assert (local.hour, local.minute) == (1, 0)
    assert to_local_day(instant, "America/Santiago") == LocalDay(2024, 9, 8)


def test_skipped_midnight_in_havana():
    assert to_instant(LocalDay(2024, 3, 10), "America/Havana") == utc(2024, 3, 10, 5)


def test_repeated_midnight_resolves_to_first_occurrence():
    # Cuba falls back from 01:00 CDT to 00:00 CST, so midnight happens twice
    assert to_instant(LocalDay(2024, 11, 3), "America/Havana") == utc(2024, 11, 3, 4)


@pytest.mark.parametrize(
    "day, timezone",
    [
        # Samoa moved across the date line, going from 29 to 31 December
        (LocalDay(2011, 12, 30), "Pacific/Apia"),
        (LocalDay(1994, 12, 31), "Pacific/Kiritimati"),
        (LocalDay(1993, 8, 21), "Pacific/Kwajalein"),
    ],
)
def test_wholly_skipped_day_maps_to_start_of_next_day(day, timezone):
    instant = to_instant(day, timezone)

    assert instant == to_instant(next_day(day), timezone)
    assert to_local_day(instant, timezone) == next_day(day)
    assert to_local_day(instant - 1, timezone) < day


def test_skipped_day_in_apia():
    assert to_instant(LocalDay(2011, 12, 30), "Pacific/Apia") == utc(2011, 12, 30, 10)


ROUND_TRIP_ZONES = [
    "UTC",
    "America/New_York",
    "America/Santiago",
    "America/Havana",
    "Europe/London",
    "Asia/Beirut",
    "Asia/Kolkata",
    "Asia/Kathmandu",
    "Australia/Sydney",
    "Pacific/Auckland",
    "Pacific/Chatham",
    "Pacific/Kiritimati",
    "Etc/GMT+12",
]


@pytest.mark.parametrize("timezone", ROUND_TRIP_ZONES)
def test_canonical_instant_starts_its_local_day(timezone):
    for day in enumerate_days(LocalDay(2024, 1, 1), LocalDay(2024, 12, 31)):
        instant = to_instant(day, timezone)

        assert to_local_day(instant, timezone) == day
        assert to_local_day(instant - 1, timezone) < day


def test_instant_with_milliseconds():
    assert to_local_day(utc(2026, 1, 14, 23, 59, 59, 999), "UTC") == LocalDay(
        2026, 1, 14
    )


def test_epoch_millis_to_datetime_keeps_milliseconds():
    datetime = epoch_millis_to_datetime(utc(2026, 1, 14, 12, 30, 15, 250), "Asia/Tokyo")

    assert (datetime.day, datetime.hour, datetime.minute) == (14, 21, 30)
    assert datetime.microsecond == 250000


@pytest.mark.parametrize("timezone", ["Mars/Olympus_Mons", "Not a zone"])
def test_unknown_timezone(timezone):
    with pytest.raises(InvalidTimezone):
        get_timezone(timezone)
    with pytest.raises(InvalidTimezone):
        to_local_day(utc(2026, 1, 14), timezone)
    with pytest.raises(InvalidTimezone):
        to_instant(LocalDay(2026, 1, 14), timezone)


def test_local_day_from_str():
    assert local_day_from_str("2028-02-29") == LocalDay(2028, 2, 29)
    assert str(LocalDay(2026, 1, 5)) == "2026-01-05"
    with pytest.raises(ValueError):
        local_day_from_str("2027-02-29")
