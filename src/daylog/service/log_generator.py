# SPDX-License-Identifier: MIT

import logging

from daylog.model.entity_id import EntityId
from daylog.model.local_day import EpochMillis, LocalDay
from daylog.model.tracker_log import TrackerLog
from daylog.service.day_range import enumerate_days
from daylog.template.tracker_log import get_tracker_log_template
from daylog.time import epoch_millis_to_datetime, get_timezone, to_instant, to_local_day

logger = logging.getLogger(__name__)


def build_log(
    tracker_id: EntityId,
    day: LocalDay,
    timezone: str,
    now: EpochMillis,
) -> TrackerLog:
    """Build an unsaved log for day whose canonical instant is its local midnight."""
    created = epoch_millis_to_datetime(now)

    log = get_tracker_log_template()
    log["tracker_id"] = tracker_id
    log["local_day"] = day
    log["canonical_instant"] = to_instant(day, timezone)
    log["timezone"] = timezone
    log["is_accomplished"] = False
    log["created"] = created
    log["updated"] = created
    return log


def build_logs_for_range(
    tracker_id: EntityId,
    start: LocalDay,
    end: LocalDay,
    timezone: str,
    now: EpochMillis,
) -> list[TrackerLog]:
    return [
        build_log(tracker_id, day, timezone, now)
        for day in enumerate_days(start, end)
    ]


def generate_logs(
    tracker_id: EntityId,
    start_instant: EpochMillis,
    timezone: str,
    now: EpochMillis,
) -> list[TrackerLog]:
    """
    Generate one log per local day from the start day through today.

    Both ends are resolved in timezone, so a tracker started late in the
    evening UTC may begin on the previous local day, and a zone ahead of UTC
    may already be on the next one.

    Raises InvalidTimezone for an unknown zone, and InvalidRange when now's
    local day precedes the start's local day.
    """
    get_timezone(timezone)

    start_day = to_local_day(start_instant, timezone)
    end_day = to_local_day(now, timezone)
    logs = build_logs_for_range(tracker_id, start_day, end_day, timezone, now)

    logger.debug(
        "Generated %d logs for tracker %s from %s to %s in %s",
        len(logs),
        tracker_id,
        start_day,
        end_day,
        timezone,
    )
    return logs
