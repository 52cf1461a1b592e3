"""In-memory record store.

Holds bundles, field definitions and records per entity type so the lookup
step can run without a host CMS: from the CLI against a YAML/JSON records
file, behind the HTTP API, and in tests.

Records file layout::

    node:
      bundles:
        article:
          label: Article
          fields:
            field_old_id: Old ID
      records:
        - id: 1
          bundle: article
          fields:
            title: First
            field_old_id: A-1
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Hashable, Iterable, Mapping

import yaml

from .base import StorageHandlerNotFound, StoreError

logger = logging.getLogger(__name__)


@dataclass
class StoredRecord:
    """Raw record data as held by the store."""
    id: Hashable
    bundle: str
    fields: dict[str, list[Any]] = field(default_factory=dict)
    published: bool = True


class MemoryRecord:
    """
    Record handle over a StoredRecord.

    Base fields (identifier, bundle discriminator, published flag) are
    mapped onto the StoredRecord; every other field reads its item list.
    Subclasses name the base fields for their entity kind.
    """

    entity_type = ""
    id_key = "id"
    bundle_key = "type"
    base_fields: dict[str, str] = {}

    def __init__(self, data: StoredRecord, field_definitions: Mapping[str, str]):
        self._data = data
        self._field_definitions = field_definitions

    @property
    def id(self) -> Hashable:
        return self._data.id

    @property
    def bundle(self) -> str:
        return self._data.bundle

    def has_field(self, name: str) -> bool:
        return (
            name in self.base_fields
            or name in self._field_definitions
            or name in self._data.fields
        )

    def get(self, name: str) -> Any:
        """Scalar value of a field: its first item, or None when empty."""
        items = self.items(name)
        return items[0] if items else None

    def items(self, name: str) -> list[Any]:
        """All items of a field; base fields always hold exactly one."""
        if name == self.id_key:
            return [self._data.id]
        if name == self.bundle_key:
            return [self._data.bundle]
        if name == "status":
            return [self._data.published]
        return list(self._data.fields.get(name, []))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id!r}, bundle={self.bundle!r})"


class NodeRecord(MemoryRecord):
    entity_type = "node"
    id_key = "nid"
    bundle_key = "type"
    base_fields = {
        "nid": "ID",
        "type": "Content type",
        "title": "Title",
        "status": "Published",
    }


class MediaRecord(MemoryRecord):
    entity_type = "media"
    id_key = "mid"
    bundle_key = "bundle"
    base_fields = {
        "mid": "ID",
        "bundle": "Media type",
        "name": "Name",
        "status": "Published",
    }


RECORD_CLASSES: dict[str, type[MemoryRecord]] = {
    "node": NodeRecord,
    "media": MediaRecord,
}


def _as_items(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class MemoryQuery:
    """Conjunctive condition query evaluated against the stored records."""

    def __init__(self, storage: "MemoryStorage"):
        self._storage = storage
        self._conditions: list[tuple[str, list[Any]]] = []
        self._access_check: bool | None = None

    def condition(self, field: str, value: Any) -> "MemoryQuery":
        self._conditions.append((field, _as_items(value)))
        return self

    def access_check(self, enabled: bool = True) -> "MemoryQuery":
        self._access_check = enabled
        return self

    def execute(self) -> list[Hashable]:
        if self._access_check is None:
            raise StoreError(
                "Entity queries must explicitly set whether the query should be access checked."
            )
        ids = []
        for record in self._storage.iter_records():
            if self._access_check and not record.get("status"):
                continue
            if all(self._matches(record, name, wanted) for name, wanted in self._conditions):
                ids.append(record.id)
        return ids

    @staticmethod
    def _matches(record: MemoryRecord, name: str, wanted: list[Any]) -> bool:
        return any(item in wanted for item in record.items(name))


class MemoryStorage:
    """Storage handler for one entity type."""

    def __init__(self, entity_type: str, record_class: type[MemoryRecord]):
        self.entity_type = entity_type
        self.record_class = record_class
        self.bundles: dict[str, str] = {}
        self.field_definitions: dict[str, dict[str, str]] = {}
        self.records: dict[Hashable, StoredRecord] = {}

    def get_query(self) -> MemoryQuery:
        return MemoryQuery(self)

    def load_multiple(self, ids: Iterable[Hashable]) -> dict[Hashable, MemoryRecord]:
        loaded = {}
        for record_id in ids:
            data = self.records.get(record_id)
            if data is not None:
                loaded[record_id] = self._wrap(data)
        return loaded

    def iter_records(self):
        for data in self.records.values():
            yield self._wrap(data)

    def _wrap(self, data: StoredRecord) -> MemoryRecord:
        return self.record_class(data, self.field_definitions.get(data.bundle, {}))

    def next_id(self) -> int:
        numeric = [i for i in self.records if isinstance(i, int)]
        return max(numeric, default=0) + 1


class InMemoryRecordStore:
    """
    Record store and schema provider backed by plain dictionaries.

    Only entity types with a registered record class have storage; asking
    for any other type raises StorageHandlerNotFound, as a host store does
    for an entity type it does not define.
    """

    def __init__(self, record_classes: Mapping[str, type[MemoryRecord]] | None = None):
        classes = RECORD_CLASSES if record_classes is None else record_classes
        self._storages = {
            entity_type: MemoryStorage(entity_type, record_class)
            for entity_type, record_class in classes.items()
        }

    # === Record store ===

    def get_storage(self, entity_type: str) -> MemoryStorage:
        storage = self._storages.get(entity_type)
        if storage is None:
            raise StorageHandlerNotFound(entity_type)
        return storage

    # === Schema provider ===

    def list_bundles(self, entity_type: str) -> dict[str, str]:
        return dict(self.get_storage(entity_type).bundles)

    def list_fields(self, entity_type: str, bundle: str) -> dict[str, str]:
        storage = self.get_storage(entity_type)
        if bundle not in storage.bundles:
            raise StoreError(f'Bundle "{bundle}" is not defined for "{entity_type}".')
        fields = dict(storage.record_class.base_fields)
        fields.update(storage.field_definitions.get(bundle, {}))
        return fields

    # === Population ===

    def add_bundle(
        self,
        entity_type: str,
        bundle: str,
        label: str | None = None,
        fields: Mapping[str, str] | None = None,
    ) -> None:
        storage = self.get_storage(entity_type)
        storage.bundles[bundle] = label or bundle
        storage.field_definitions.setdefault(bundle, {}).update(fields or {})

    def add_record(
        self,
        entity_type: str,
        bundle: str,
        fields: Mapping[str, Any] | None = None,
        record_id: Hashable | None = None,
        published: bool = True,
    ) -> Hashable:
        """Add a record, returning its id. Unknown bundles are created on the fly."""
        storage = self.get_storage(entity_type)
        if bundle not in storage.bundles:
            self.add_bundle(entity_type, bundle)
        if record_id is None:
            record_id = storage.next_id()
        storage.records[record_id] = StoredRecord(
            id=record_id,
            bundle=bundle,
            fields={name: _as_items(value) for name, value in (fields or {}).items()},
            published=published,
        )
        return record_id

    def remove_record(self, entity_type: str, record_id: Hashable) -> None:
        self.get_storage(entity_type).records.pop(record_id, None)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "InMemoryRecordStore":
        """Build a store from the records file layout (see module docstring)."""
        store = cls()
        for entity_type, section in data.items():
            section = section or {}
            for bundle, bundle_def in (section.get("bundles") or {}).items():
                bundle_def = bundle_def or {}
                store.add_bundle(
                    entity_type,
                    bundle,
                    label=bundle_def.get("label"),
                    fields=bundle_def.get("fields"),
                )
            for record in section.get("records") or []:
                store.add_record(
                    entity_type,
                    record["bundle"],
                    fields=record.get("fields"),
                    record_id=record.get("id"),
                    published=record.get("published", True),
                )
        return store

    @classmethod
    def from_file(cls, path: Path | str) -> "InMemoryRecordStore":
        """Load a records file; .json is parsed as JSON, anything else as YAML."""
        path = Path(path)
        text = path.read_text(encoding="utf-8")
        if path.suffix == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Records file must contain a mapping: {path}")
        store = cls.from_dict(data)
        logger.debug(f"Loaded records from {path}")
        return store
