# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path

from daylog import configuration
from daylog.exceptions import NotFound
from daylog.model.entity_id import EntityId, generate_entity_id
from daylog.model.tracker import Tracker
from daylog.repository.entity_files import EntityFiles


class TrackerRepository(EntityFiles[Tracker]):
    entity_name = "Tracker"

    def default_data_dir(self) -> Path:
        return configuration.DATA_TRACKERS_DIR

    def save_new_tracker(self, tracker: Tracker) -> EntityId:
        tracker_id = generate_entity_id()
        tracker["id"] = tracker_id
        self.add(tracker_id, tracker)
        return tracker_id

    def delete_tracker(self, id: EntityId) -> None:
        self.remove(id)

    def get_tracker(self, id: EntityId) -> Tracker:
        return self.get(id)

    def get_trackers_for_owner(self, owner_id: EntityId) -> list[Tracker]:
        """Trackers of one owner, oldest first."""
        owned = [
            tracker
            for tracker in self.entities.values()
            if tracker["owner_id"] == owner_id
        ]
        return deepcopy(sorted(owned, key=lambda tracker: tracker["created"]))

    def resolve_id(self, id_or_prefix: str) -> EntityId:
        """Expand a unique prefix of a tracker id to the full id."""
        if id_or_prefix in self.entities:
            return id_or_prefix

        matches = [id for id in self.entities if id.startswith(id_or_prefix)]
        if len(matches) == 1:
            return matches[0]
        if matches:
            raise NotFound(f"Tracker id {id_or_prefix} is ambiguous")
        raise NotFound(f"Tracker {id_or_prefix} not found")


TRACKER_REPO = TrackerRepository()
