# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Any, Generic, Optional, TypeVar, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from daylog import time
from daylog.exceptions import NotFound
from daylog.model.entity_id import EntityId

Entity = TypeVar("Entity")


class EntityFiles(Generic[Entity]):
    """
    Entities of one type stored as one YAML file each.

    Files are read on first access and kept in memory keyed by id. Nothing is
    written until flush(), which rewrites the files of changed entities and
    removes the files of deleted ones. Subclasses name their entity for error
    messages, may name files by something other than the id, and may extend
    the (de)serialization hooks, which already convert the created/updated
    timestamps.
    """

    entity_name = "Entity"

    def __init__(self, data_dir: Optional[Path] = None) -> None:
        self._data_dir = data_dir
        self._entities: Optional[dict[EntityId, Entity]] = None
        self.is_dirty = False
        self._dirty_ids: set[EntityId] = set()
        self._deleted_files: set[str] = set()

    def default_data_dir(self) -> Path:
        raise NotImplementedError

    @property
    def data_dir(self) -> Path:
        if self._data_dir is not None:
            return self._data_dir
        return self.default_data_dir()

    @property
    def entities(self) -> dict[EntityId, Entity]:
        if self._entities is None:
            self._entities = self.__read_files()
        return self._entities

    def __read_files(self) -> dict[EntityId, Entity]:
        entities: dict[EntityId, Entity] = {}
        if not self.data_dir.is_dir():
            return entities

        for file_path in sorted(self.data_dir.glob("*.yaml")):
            raw_entity = load(file_path.read_text(), Loader=Loader)
            if raw_entity is None:
                continue
            entity = self.from_yaml(raw_entity)
            entities[cast(dict[str, Any], entity)["id"]] = entity
        return entities

    def file_name(self, entity: Entity) -> str:
        return f"{cast(dict[str, Any], entity)['id']}.yaml"

    def to_yaml(self, entity: Entity) -> dict[str, Any]:
        data = cast(dict[str, Any], deepcopy(entity))
        data["created"] = time.datetime_to_iso_str(data["created"])
        data["updated"] = time.datetime_to_iso_str(data["updated"])
        return data

    def from_yaml(self, data: dict[str, Any]) -> Entity:
        data["created"] = time.datetime_from_str(data["created"])
        data["updated"] = time.datetime_from_str(data["updated"])
        return cast(Entity, data)

    def flush(self) -> bool:
        if self._entities is None or not self.is_dirty:
            return False

        self.data_dir.mkdir(parents=True, exist_ok=True)
        for entity_id in self._dirty_ids:
            if entity_id in self._entities:
                entity = self._entities[entity_id]
                file_path = self.data_dir / self.file_name(entity)
                file_path.write_text(dump(self.to_yaml(entity), Dumper=Dumper))
        for file_name in self._deleted_files:
            (self.data_dir / file_name).unlink(missing_ok=True)

        self._dirty_ids.clear()
        self._deleted_files.clear()
        self.is_dirty = False
        return True

    def create_file(self, entity: Entity) -> None:
        """
        Write the file of a new entity right away.

        Raises FileExistsError when the file already exists, including when
        another process created it after this one loaded the directory. A
        pending delete of the same file is applied first.
        """
        file_name = self.file_name(entity)
        if file_name in self._deleted_files:
            (self.data_dir / file_name).unlink(missing_ok=True)
            self._deleted_files.discard(file_name)

        self.data_dir.mkdir(parents=True, exist_ok=True)
        with (self.data_dir / file_name).open("x") as file:
            dump(self.to_yaml(entity), file, Dumper=Dumper)

    def find(self, id: EntityId) -> Entity:
        """Return the stored entity itself; callers get copies from get()."""
        if id not in self.entities:
            raise NotFound(f"{self.entity_name} {id} not found")
        return self.entities[id]

    def get(self, id: EntityId) -> Entity:
        return deepcopy(self.find(id))

    def add(self, id: EntityId, entity: Entity) -> None:
        self.entities[id] = entity
        self.mark_dirty(id)

    def mark_dirty(self, id: EntityId) -> None:
        self.is_dirty = True
        self._dirty_ids.add(id)

    def remove(self, id: EntityId) -> Entity:
        entity = self.find(id)
        del self.entities[id]
        self.is_dirty = True
        self._dirty_ids.discard(id)
        self._deleted_files.add(self.file_name(entity))
        return entity
