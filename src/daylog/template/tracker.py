# SPDX-License-Identifier: MIT

from daylog.model.entity_id import UNSET_ENTITY_ID
from daylog.model.entity_type import EntityType
from daylog.model.tracker import Tracker
from daylog.time import now_utc


def get_tracker_template() -> Tracker:
    now = now_utc()
    return {
        "id": None,
        "entity_type": EntityType.TRACKER,
        "owner_id": UNSET_ENTITY_ID,  # Must be set
        "name": "",
        "description": None,
        "start_instant": 0,  # Must be set
        "timezone": "UTC",
        "created": now,
        "updated": now,
    }
