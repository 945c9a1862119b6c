# SPDX-License-Identifier: MIT

import logging
from typing import Literal, Optional, TypedDict, cast

from daylog.exceptions import LogNotFound, PartialInsertError, Unauthorized
from daylog.identity import ConfigIdentityProvider, IdentityProvider
from daylog.model.entity_id import UNSET_ENTITY_ID, EntityId
from daylog.model.local_day import EpochMillis, LocalDay
from daylog.model.tracker import Tracker
from daylog.model.tracker_log import TrackerLog
from daylog.model.user import User
from daylog.repository.configuration import CONFIGURATION_REPO
from daylog.repository.store import BulkInsertResult, TrackerLogStore
from daylog.repository.tracker import TRACKER_REPO, TrackerRepository
from daylog.repository.tracker_log import TRACKER_LOG_REPO
from daylog.repository.user import USER_REPO, UserRepository
from daylog.service.backfill import plan_backfill
from daylog.service.log_generator import generate_logs
from daylog.template.tracker import get_tracker_template
from daylog.template.user import get_user_template
from daylog.time import epoch_millis_to_datetime, get_timezone

logger = logging.getLogger(__name__)

LogRange = Literal["month", "year"]


class BackfillResult(TypedDict):
    created: int
    requested: int
    conflicts: int  # Days a concurrent writer had already created


class MonthGroup(TypedDict):
    month: int
    logs: list[TrackerLog]


class YearGroup(TypedDict):
    year: int
    months: list[MonthGroup]


def insert_logs(store: TrackerLogStore, logs: list[TrackerLog]) -> BulkInsertResult:
    """
    Bulk insert logs, treating existing days as already done.

    Raises PartialInsertError when any record failed for another reason.
    """
    result = store.bulk_insert(logs)
    if result["conflicts"]:
        logger.warning(
            "%d of %d days already existed", len(result["conflicts"]), len(logs)
        )
    if result["failures"]:
        created = len(result["inserted_ids"])
        logger.warning("Only %d of %d days created", created, len(logs))
        raise PartialInsertError(created, len(logs))
    return result


def group_logs_by_year_and_month(logs: list[TrackerLog]) -> list[YearGroup]:
    """Group logs for the dashboard: newest year and month first, days ascending."""
    year_map: dict[int, dict[int, list[TrackerLog]]] = {}
    for log in sorted(logs, key=lambda log: log["local_day"]):
        local_day = log["local_day"]
        year_map.setdefault(local_day.year, {}).setdefault(local_day.month, []).append(
            log
        )

    return [
        {
            "year": year,
            "months": [
                {"month": month, "logs": month_map[month]}
                for month in sorted(month_map, reverse=True)
            ],
        }
        for year, month_map in sorted(year_map.items(), reverse=True)
    ]


class TrackerService:
    """Tracker and log operations on behalf of the authenticated caller."""

    def __init__(
        self,
        identity: IdentityProvider,
        users: UserRepository,
        trackers: TrackerRepository,
        tracker_logs: TrackerLogStore,
    ) -> None:
        self.identity = identity
        self.users = users
        self.trackers = trackers
        self.tracker_logs = tracker_logs

    def ensure_user(self, name: str, email: Optional[str]) -> User:
        """Return the caller's user record, creating it on first use."""
        subject = self.identity.get_subject()
        if subject is None:
            raise Unauthorized()

        user = self.users.get_user_by_auth_id(subject)
        if user is not None:
            return user

        user = get_user_template()
        user["auth_id"] = subject
        user["name"] = name
        user["email"] = email
        user_id = self.users.save_new_user(user)
        logger.info("Created user %s for subject %s", user_id, subject)
        return self.users.get_user(user_id)

    def resolve_user(self) -> User:
        subject = self.identity.get_subject()
        if subject is None:
            raise Unauthorized()
        user = self.users.get_user_by_auth_id(subject)
        if user is None:
            raise Unauthorized()
        return user

    def get_owned_tracker(self, tracker_id: EntityId) -> Tracker:
        user = self.resolve_user()
        tracker = self.trackers.get_tracker(tracker_id)
        if tracker["owner_id"] != user["id"]:
            raise Unauthorized()
        return tracker

    def list_trackers(self) -> list[Tracker]:
        user = self.resolve_user()
        return self.trackers.get_trackers_for_owner(cast(EntityId, user["id"]))

    def create_tracker(
        self,
        name: str,
        start_instant: EpochMillis,
        timezone: str,
        now: EpochMillis,
        description: Optional[str] = None,
    ) -> EntityId:
        """Save a new tracker and generate its logs from the start day to today."""
        user = self.resolve_user()
        get_timezone(timezone)

        # Fails before anything is saved when now precedes the start day
        logs = generate_logs(UNSET_ENTITY_ID, start_instant, timezone, now)

        created = epoch_millis_to_datetime(now)
        tracker = get_tracker_template()
        tracker["owner_id"] = cast(EntityId, user["id"])
        tracker["name"] = name
        tracker["description"] = description
        tracker["start_instant"] = start_instant
        tracker["timezone"] = timezone
        tracker["created"] = created
        tracker["updated"] = created
        tracker_id = self.trackers.save_new_tracker(tracker)

        for log in logs:
            log["tracker_id"] = tracker_id
        insert_logs(self.tracker_logs, logs)

        logger.info(
            "Created tracker %s (%s) with %d logs in %s",
            tracker_id,
            name,
            len(logs),
            timezone,
        )
        return tracker_id

    def backfill_tracker(
        self,
        tracker_id: EntityId,
        now: EpochMillis,
        timezone: Optional[str] = None,
    ) -> BackfillResult:
        """
        Create the logs missing since the tracker's latest day, through today.

        timezone is the caller's current zone and defaults to the one the
        tracker was created in.
        """
        tracker = self.get_owned_tracker(tracker_id)
        log_timezone = timezone if timezone is not None else tracker["timezone"]

        existing_logs = self.tracker_logs.get_logs_for_tracker(tracker_id)
        logs = plan_backfill(tracker, existing_logs, log_timezone, now)
        if not logs:
            return {"created": 0, "requested": 0, "conflicts": 0}

        result = insert_logs(self.tracker_logs, logs)
        created = len(result["inserted_ids"])
        logger.info("Backfilled %d logs for tracker %s", created, tracker_id)
        return {
            "created": created,
            "requested": len(logs),
            "conflicts": len(result["conflicts"]),
        }

    def update_status(
        self,
        tracker_id: EntityId,
        local_day: LocalDay,
        is_accomplished: bool,
    ) -> TrackerLog:
        self.get_owned_tracker(tracker_id)

        logs_in_month = self.tracker_logs.get_logs_for_tracker_month(
            tracker_id, local_day.month, local_day.year
        )
        matches = [log for log in logs_in_month if log["local_day"] == local_day]
        if not matches:
            raise LogNotFound(local_day)

        log_id = cast(EntityId, matches[0]["id"])
        self.tracker_logs.patch(log_id, {"is_accomplished": is_accomplished})
        return self.tracker_logs.get(log_id)

    def list_logs(
        self,
        tracker_id: EntityId,
        range: LogRange,
        month: int,
        year: int,
    ) -> list[TrackerLog]:
        self.get_owned_tracker(tracker_id)
        if range == "month":
            return self.tracker_logs.get_logs_for_tracker_month(tracker_id, month, year)
        return self.tracker_logs.get_logs_for_tracker_year(tracker_id, year)

    def list_logs_for_tracker(self, tracker_id: EntityId) -> list[TrackerLog]:
        self.get_owned_tracker(tracker_id)
        return self.tracker_logs.get_logs_for_tracker(tracker_id)

    def delete_tracker(self, tracker_id: EntityId) -> int:
        """Delete a tracker and all of its logs. Returns the number of logs removed."""
        self.get_owned_tracker(tracker_id)

        logs = self.tracker_logs.get_logs_for_tracker(tracker_id)
        for log in logs:
            self.tracker_logs.delete(cast(EntityId, log["id"]))
        self.trackers.delete_tracker(tracker_id)

        logger.info("Deleted tracker %s and %d logs", tracker_id, len(logs))
        return len(logs)


TRACKER_SERVICE = TrackerService(
    ConfigIdentityProvider(CONFIGURATION_REPO),
    USER_REPO,
    TRACKER_REPO,
    TRACKER_LOG_REPO,
)
