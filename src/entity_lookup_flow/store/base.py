"""Interfaces the lookup core consumes from a host record store.

The core never reaches for a global entity manager; a concrete store is
handed to it explicitly. Anything satisfying these protocols works, the
in-memory store in this package being one implementation.
"""

from __future__ import annotations

from typing import Any, Hashable, Iterable, Mapping, Protocol, runtime_checkable


class StoreError(Exception):
    """Raised by store adapters for failures of the store layer itself."""


class StorageHandlerNotFound(StoreError):
    """The store has no storage handler for the requested entity type."""

    def __init__(self, entity_type: str):
        super().__init__(f'The "{entity_type}" entity type does not exist.')
        self.entity_type = entity_type


@runtime_checkable
class RecordHandle(Protocol):
    """A loaded record: its identifier plus field presence and value access."""

    @property
    def id(self) -> Hashable: ...

    def has_field(self, name: str) -> bool: ...

    def get(self, name: str) -> Any: ...


class EntityQuery(Protocol):
    """Conjunctive query over one entity type, returning record ids in order."""

    def condition(self, field: str, value: Any) -> "EntityQuery":
        """Add an equality condition; a list/tuple value means "any of"."""
        ...

    def access_check(self, enabled: bool = True) -> "EntityQuery": ...

    def execute(self) -> list[Hashable]: ...


class EntityStorage(Protocol):
    """Query factory and bulk loader for a single entity type."""

    def get_query(self) -> EntityQuery: ...

    def load_multiple(self, ids: Iterable[Hashable]) -> Mapping[Hashable, RecordHandle]: ...


class RecordStore(Protocol):
    def get_storage(self, entity_type: str) -> EntityStorage:
        """Return the storage handler, raising StorageHandlerNotFound if absent."""
        ...


class SchemaProvider(Protocol):
    """Configuration-time schema introspection."""

    def list_bundles(self, entity_type: str) -> Mapping[str, str]: ...

    def list_fields(self, entity_type: str, bundle: str) -> Mapping[str, str]: ...
