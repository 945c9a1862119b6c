# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from daylog.model.entity_id import EntityId


class User(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "user"
    auth_id: str  # Subject issued by the identity provider
    name: str
    email: Optional[str]
    created: pendulum.DateTime
    updated: pendulum.DateTime
