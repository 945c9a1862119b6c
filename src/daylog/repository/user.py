# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Optional

from daylog import configuration, time
from daylog.model.entity_id import EntityId, generate_entity_id
from daylog.model.user import User
from daylog.repository.entity_files import EntityFiles


class UserRepository(EntityFiles[User]):
    entity_name = "User"

    def default_data_dir(self) -> Path:
        return configuration.DATA_USERS_DIR

    def save_new_user(self, user: User) -> EntityId:
        user_id = generate_entity_id()
        user["id"] = user_id
        self.add(user_id, user)
        return user_id

    def modify_user(
        self,
        id: EntityId,
        name: Optional[str],
        email: Optional[str],
    ) -> None:
        user = self.find(id)
        self.mark_dirty(id)

        user["updated"] = time.now_utc()
        if name is not None:
            user["name"] = name
        if email is not None:
            user["email"] = email

    def get_user(self, id: EntityId) -> User:
        return self.get(id)

    def get_user_by_auth_id(self, auth_id: str) -> Optional[User]:
        for user in self.entities.values():
            if user["auth_id"] == auth_id:
                return deepcopy(user)
        return None


USER_REPO = UserRepository()
