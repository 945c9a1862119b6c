# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from daylog.model.entity_id import EntityId
from daylog.model.local_day import EpochMillis, LocalDay


class TrackerLog(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "tracker_log"
    tracker_id: EntityId  # Reference to parent tracker
    local_day: LocalDay  # Unique per tracker

    # UTC instant of local midnight of local_day in timezone
    canonical_instant: EpochMillis
    timezone: str  # IANA zone used to generate this log

    is_accomplished: bool  # Only field a user may change

    # Standard fields
    created: pendulum.DateTime
    updated: pendulum.DateTime
