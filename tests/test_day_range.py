import pytest

from daylog.exceptions import InvalidRange
from daylog.model.local_day import LocalDay
from daylog.service.day_range import days_between, enumerate_days, next_day


@pytest.mark.parametrize(
    "day, expected",
    [
        (LocalDay(2026, 1, 14), LocalDay(2026, 1, 15)),
        (LocalDay(2026, 1, 31), LocalDay(2026, 2, 1)),
        (LocalDay(2027, 2, 28), LocalDay(2027, 3, 1)),
        (LocalDay(2028, 2, 28), LocalDay(2028, 2, 29)),
        (LocalDay(2028, 2, 29), LocalDay(2028, 3, 1)),
        (LocalDay(2025, 12, 31), LocalDay(2026, 1, 1)),
    ],
)
def test_next_day(day, expected):
    assert next_day(day) == expected


def test_single_day_range():
    assert enumerate_days(LocalDay(2026, 1, 14), LocalDay(2026, 1, 14)) == [
        LocalDay(2026, 1, 14)
    ]


def test_range_across_year_end():
    assert enumerate_days(LocalDay(2025, 12, 30), LocalDay(2026, 1, 2)) == [
        LocalDay(2025, 12, 30),
        LocalDay(2025, 12, 31),
        LocalDay(2026, 1, 1),
        LocalDay(2026, 1, 2),
    ]


def test_leap_february():
    days = enumerate_days(LocalDay(2028, 2, 1), LocalDay(2028, 3, 1))

    assert len(days) == 30
    assert LocalDay(2028, 2, 29) in days


def test_range_across_dst_change_has_no_gaps():
    days = enumerate_days(LocalDay(2026, 3, 1), LocalDay(2026, 11, 30))

    assert len(days) == days_between(LocalDay(2026, 3, 1), LocalDay(2026, 11, 30)) + 1
    assert all(next_day(a) == b for a, b in zip(days, days[1:]))


def test_whole_leap_year():
    days = enumerate_days(LocalDay(2024, 1, 1), LocalDay(2024, 12, 31))

    assert len(days) == 366
    assert days == sorted(set(days))


def test_backwards_range():
    with pytest.raises(InvalidRange):
        enumerate_days(LocalDay(2026, 1, 15), LocalDay(2026, 1, 14))


def test_days_between():
    assert days_between(LocalDay(2026, 1, 14), LocalDay(2026, 1, 14)) == 0
    assert days_between(LocalDay(2025, 12, 31), LocalDay(2026, 1, 1)) == 1
    assert days_between(LocalDay(2026, 1, 14), LocalDay(2026, 1, 12)) == -2
