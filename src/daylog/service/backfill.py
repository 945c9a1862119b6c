# SPDX-License-Identifier: MIT

import logging
from typing import Literal

from daylog.model.local_day import EpochMillis, LocalDay
from daylog.model.tracker import Tracker
from daylog.model.tracker_log import TrackerLog
from daylog.service.day_range import next_day
from daylog.service.log_generator import build_logs_for_range, generate_logs
from daylog.time import get_timezone, to_local_day

logger = logging.getLogger(__name__)

CoverageState = Literal["uninitialized", "partially_covered", "fully_current"]


def latest_local_day(logs: list[TrackerLog]) -> LocalDay:
    """
    Return the latest local day among logs.

    Ordered by calendar day rather than canonical instant, since logs written
    in different timezones can disagree on the two orderings.
    """
    return max(log["local_day"] for log in logs)


def plan_backfill(
    tracker: Tracker,
    existing_logs: list[TrackerLog],
    timezone: str,
    now: EpochMillis,
) -> list[TrackerLog]:
    """
    Return the logs missing after the latest existing day, through today.

    With no existing logs the whole range from the tracker's start is
    generated. Days at or before the latest existing day are never emitted,
    so running this again right after saving its result yields nothing.
    """
    get_timezone(timezone)
    tracker_id = tracker["id"]
    if tracker_id is None:
        raise ValueError("Tracker must be saved before it can be backfilled")

    if not existing_logs:
        logger.debug("Tracker %s has no logs, generating from its start", tracker_id)
        return generate_logs(tracker_id, tracker["start_instant"], timezone, now)

    resume_day = next_day(latest_local_day(existing_logs))
    today = to_local_day(now, timezone)
    if resume_day > today:
        logger.debug("Tracker %s is current through %s", tracker_id, today)
        return []

    logs = build_logs_for_range(tracker_id, resume_day, today, timezone, now)
    logger.debug(
        "Tracker %s is missing %d days from %s to %s",
        tracker_id,
        len(logs),
        resume_day,
        today,
    )
    return logs


def coverage_state(
    existing_logs: list[TrackerLog],
    timezone: str,
    now: EpochMillis,
) -> CoverageState:
    if not existing_logs:
        return "uninitialized"
    if latest_local_day(existing_logs) >= to_local_day(now, timezone):
        return "fully_current"
    return "partially_covered"
