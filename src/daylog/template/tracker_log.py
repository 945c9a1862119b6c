# SPDX-License-Identifier: MIT

from daylog.model.entity_id import UNSET_ENTITY_ID
from daylog.model.entity_type import EntityType
from daylog.model.local_day import LocalDay
from daylog.model.tracker_log import TrackerLog
from daylog.time import now_utc


def get_tracker_log_template() -> TrackerLog:
    now = now_utc()
    return {
        "id": None,
        "entity_type": EntityType.TRACKER_LOG,
        "tracker_id": UNSET_ENTITY_ID,  # Must be set
        "local_day": LocalDay(1970, 1, 1),  # Must be set
        "canonical_instant": 0,  # Must be set
        "timezone": "UTC",
        "is_accomplished": False,
        "created": now,
        "updated": now,
    }
