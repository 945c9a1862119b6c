# SPDX-License-Identifier: MIT

from daylog.model.entity_type import EntityType
from daylog.model.user import User
from daylog.time import now_utc


def get_user_template() -> User:
    now = now_utc()
    return {
        "id": None,
        "entity_type": EntityType.USER,
        "auth_id": "",
        "name": "",
        "email": None,
        "created": now,
        "updated": now,
    }
