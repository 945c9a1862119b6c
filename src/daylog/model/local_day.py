# SPDX-License-Identifier: MIT

from typing import NamedTuple, TypeAlias

EpochMillis: TypeAlias = int


class LocalDay(NamedTuple):
    """A civil calendar date in some timezone, with no time of day.

    Tuple ordering gives calendar order: year, then month, then day.
    """

    year: int
    month: int
    day: int

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
