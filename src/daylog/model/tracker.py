# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from daylog.model.entity_id import EntityId
from daylog.model.local_day import EpochMillis


class Tracker(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "tracker"
    owner_id: EntityId  # Reference to owning user
    name: str  # e.g., "Read 20 pages"
    description: Optional[str]

    # First day is the local day of start_instant in timezone
    start_instant: EpochMillis
    timezone: str  # IANA zone at creation time

    # Standard fields
    created: pendulum.DateTime
    updated: pendulum.DateTime
