# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, TypeAlias

from daylog import configuration, time
from daylog.exceptions import ConflictOnInsert, DaylogError
from daylog.model.entity_id import EntityId, generate_entity_id
from daylog.model.local_day import LocalDay
from daylog.model.tracker_log import TrackerLog
from daylog.repository.entity_files import EntityFiles
from daylog.repository.store import BulkInsertResult, TrackerLogPatch

logger = logging.getLogger(__name__)

PATCHABLE_FIELDS = frozenset({"is_accomplished"})

DayKey: TypeAlias = tuple[EntityId, LocalDay]


class TrackerLogRepository(EntityFiles[TrackerLog]):
    """Log files plus an in-memory index enforcing one log per tracker and day."""

    entity_name = "Tracker log"

    def __init__(self, data_dir: Optional[Path] = None) -> None:
        super().__init__(data_dir)
        self._day_index: Optional[dict[DayKey, EntityId]] = None

    def default_data_dir(self) -> Path:
        return configuration.DATA_TRACKER_LOGS_DIR

    @property
    def day_index(self) -> dict[DayKey, EntityId]:
        if self._day_index is None:
            self._day_index = self.__build_day_index()
        return self._day_index

    def __build_day_index(self) -> dict[DayKey, EntityId]:
        """Index logs by tracker and day, keeping the oldest of any duplicates."""
        day_index: dict[DayKey, EntityId] = {}
        for log_id, tracker_log in sorted(
            self.entities.items(), key=lambda item: item[1]["created"]
        ):
            key = (tracker_log["tracker_id"], tracker_log["local_day"])
            if key in day_index:
                logger.warning(
                    "Ignoring duplicate log %s of tracker %s for %s, keeping %s",
                    log_id,
                    key[0],
                    key[1],
                    day_index[key],
                )
                continue
            day_index[key] = log_id
        return day_index

    def file_name(self, entity: TrackerLog) -> str:
        local_day = time.local_day_to_str(entity["local_day"])
        return f"{entity['tracker_id']}_{local_day}.yaml"

    def to_yaml(self, entity: TrackerLog) -> dict[str, Any]:
        data = super().to_yaml(entity)
        data["local_day"] = time.local_day_to_str(entity["local_day"])
        return data

    def from_yaml(self, data: dict[str, Any]) -> TrackerLog:
        data["local_day"] = time.local_day_from_str(str(data["local_day"]))
        return super().from_yaml(data)

    def insert(self, tracker_log: TrackerLog) -> EntityId:
        """
        Store a new log under a fresh id.

        Raises ConflictOnInsert when the tracker already has a log for the
        day, and ValueError when canonical_instant is not the local midnight
        of local_day in the log's timezone.

        The log file is named by tracker and day and created exclusively on
        insert, so a log written by another process for the same day is a
        conflict too.
        """
        local_day = LocalDay(*tracker_log["local_day"])
        key = (tracker_log["tracker_id"], local_day)
        if key in self.day_index:
            raise ConflictOnInsert(*key)

        expected_instant = time.to_instant(local_day, tracker_log["timezone"])
        if tracker_log["canonical_instant"] != expected_instant:
            raise ValueError(
                f"Canonical instant {tracker_log['canonical_instant']} is not local "
                f"midnight of {local_day} in {tracker_log['timezone']}"
            )

        log_id = generate_entity_id()
        new_tracker_log = deepcopy(tracker_log)
        new_tracker_log["id"] = log_id
        new_tracker_log["local_day"] = local_day

        try:
            self.create_file(new_tracker_log)
        except FileExistsError as error:
            raise ConflictOnInsert(*key) from error

        self.entities[log_id] = new_tracker_log
        self.day_index[key] = log_id
        return log_id

    def bulk_insert(self, tracker_logs: list[TrackerLog]) -> BulkInsertResult:
        """Insert logs one at a time, collecting conflicts and failures instead of raising."""
        result: BulkInsertResult = {"inserted_ids": [], "conflicts": [], "failures": []}
        for tracker_log in tracker_logs:
            try:
                result["inserted_ids"].append(self.insert(tracker_log))
            except ConflictOnInsert as conflict:
                logger.info("Skipping existing log: %s", conflict)
                result["conflicts"].append(conflict.local_day)
            except (DaylogError, ValueError) as error:
                logger.warning(
                    "Failed to insert log for %s: %s", tracker_log["local_day"], error
                )
                result["failures"].append(
                    {"local_day": tracker_log["local_day"], "reason": str(error)}
                )
        return result

    def patch(self, id: EntityId, fields: TrackerLogPatch) -> None:
        unknown_fields = set(fields) - PATCHABLE_FIELDS
        if unknown_fields:
            raise ValueError(
                f"Tracker log fields cannot be modified: {', '.join(sorted(unknown_fields))}"
            )

        tracker_log = self.find(id)
        self.mark_dirty(id)

        tracker_log["updated"] = time.now_utc()
        if "is_accomplished" in fields:
            tracker_log["is_accomplished"] = fields["is_accomplished"]

    def delete(self, id: EntityId) -> None:
        tracker_log = self.remove(id)
        self.day_index.pop((tracker_log["tracker_id"], tracker_log["local_day"]), None)

    def get_log_for_day(
        self, tracker_id: EntityId, local_day: LocalDay
    ) -> Optional[TrackerLog]:
        log_id = self.day_index.get((tracker_id, local_day))
        if log_id is None:
            return None
        return self.get(log_id)

    def get_logs_for_tracker(self, tracker_id: EntityId) -> list[TrackerLog]:
        """All indexed logs of a tracker ordered by local day."""
        return sorted(
            (
                self.get(log_id)
                for (log_tracker_id, _), log_id in self.day_index.items()
                if log_tracker_id == tracker_id
            ),
            key=lambda tracker_log: tracker_log["local_day"],
        )

    def get_logs_for_tracker_month(
        self, tracker_id: EntityId, month: int, year: int
    ) -> list[TrackerLog]:
        return [
            tracker_log
            for tracker_log in self.get_logs_for_tracker(tracker_id)
            if (tracker_log["local_day"].year, tracker_log["local_day"].month)
            == (year, month)
        ]

    def get_logs_for_tracker_year(
        self, tracker_id: EntityId, year: int
    ) -> list[TrackerLog]:
        return [
            tracker_log
            for tracker_log in self.get_logs_for_tracker(tracker_id)
            if tracker_log["local_day"].year == year
        ]


TRACKER_LOG_REPO = TrackerLogRepository()
