# SPDX-License-Identifier: MIT

from typing import Protocol, TypedDict

from daylog.model.entity_id import EntityId
from daylog.model.local_day import LocalDay
from daylog.model.tracker_log import TrackerLog


class TrackerLogPatch(TypedDict, total=False):
    is_accomplished: bool


class FailedInsert(TypedDict):
    local_day: LocalDay
    reason: str


class BulkInsertResult(TypedDict):
    inserted_ids: list[EntityId]
    conflicts: list[LocalDay]  # Days another writer already created
    failures: list[FailedInsert]


class TrackerLogStore(Protocol):
    """
    Storage for tracker logs.

    Single record operations are atomic. insert raises ConflictOnInsert when
    the tracker already has a log for that local day; bulk_insert applies
    records one at a time and reports which of them did not land.
    """

    def get(self, id: EntityId) -> TrackerLog: ...

    def insert(self, log: TrackerLog) -> EntityId: ...

    def bulk_insert(self, logs: list[TrackerLog]) -> BulkInsertResult: ...

    def patch(self, id: EntityId, fields: TrackerLogPatch) -> None: ...

    def delete(self, id: EntityId) -> None: ...

    def get_logs_for_tracker(self, tracker_id: EntityId) -> list[TrackerLog]: ...

    def get_logs_for_tracker_month(
        self, tracker_id: EntityId, month: int, year: int
    ) -> list[TrackerLog]: ...

    def get_logs_for_tracker_year(
        self, tracker_id: EntityId, year: int
    ) -> list[TrackerLog]: ...
