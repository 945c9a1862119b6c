# SPDX-License-Identifier: MIT

from daylog.model.local_day import LocalDay


class DaylogError(Exception):
    """Base class for errors surfaced to the caller."""

    pass


class InvalidTimezone(DaylogError):
    """Raised when a timezone name is not a recognized IANA zone."""

    def __init__(self, timezone: str) -> None:
        super().__init__(f"Unknown timezone: {timezone!r}")
        self.timezone = timezone


class InvalidRange(DaylogError):
    """Raised when a day range would run backwards."""

    def __init__(self, start: LocalDay, end: LocalDay) -> None:
        super().__init__(f"Start day {start} is after end day {end}")
        self.start = start
        self.end = end


class Unauthorized(DaylogError):
    """Raised when the caller cannot be resolved or does not own the tracker."""

    def __init__(self, message: str = "Invalid request") -> None:
        super().__init__(message)


class NotFound(DaylogError):
    """Raised when a referenced record does not exist."""

    pass


class LogNotFound(NotFound):
    """Raised when a tracker has no log for the requested local day."""

    def __init__(self, local_day: LocalDay) -> None:
        super().__init__(f"No log found for {local_day}")
        self.local_day = local_day


class ConflictOnInsert(DaylogError):
    """Raised when a log for (tracker, local day) already exists."""

    def __init__(self, tracker_id: str, local_day: LocalDay) -> None:
        super().__init__(f"Tracker {tracker_id} already has a log for {local_day}")
        self.tracker_id = tracker_id
        self.local_day = local_day


class PartialInsertError(DaylogError):
    """Raised when a bulk insert applied only some of its records."""

    def __init__(self, created: int, requested: int) -> None:
        super().__init__(f"{created} of {requested} days created")
        self.created = created
        self.requested = requested
